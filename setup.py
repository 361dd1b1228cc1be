#!/usr/bin/python3
# -*- coding: utf-8 -*-

from setuptools import setup, find_packages
import os

ROOT = os.path.abspath(os.path.dirname(__file__))

with open(os.path.join(ROOT, 'README.md'), 'r', encoding='utf-8') as f:
    long_description = f.read()

setup(
    name='pywellsim',
    include_package_data=True,
    version='0.1.0',
    packages=find_packages(),
    description='pyWellSim - Closure relations for multiphase wellbore flow',
    long_description=long_description,
    long_description_content_type='text/markdown',
    author='Mark W. Burgoyne',
    author_email='mark.w.burgoyne@gmail.com',
    keywords=['wellbore', 'multiphase', 'drift-flux', 'petroleum'],
    classifiers=[],
    python_requires='>=3.8',
    install_requires=[
        'numpy',
        'pandas',
        'tabulate',
    ],
    extras_require={
        'test': ['pytest'],
    },
)
