from pywellsim.classes import class_dic

def validate_methods(names, variables):
    """ Resolves method names given as strings (any case) to their Enum members.
        Enum members pass through unchanged. Raises ValueError for unknown names.
    """
    variables = list(variables)
    for m, method in enumerate(names):
        if isinstance(variables[m], str):
            try:
                variables[m] = class_dic[method][variables[m].upper()]
            except KeyError:
                options = ", ".join(e.name for e in class_dic[method])
                raise ValueError(
                    f"An incorrect {method} was specified: '{variables[m]}'. Options are: {options}"
                ) from None
        elif not isinstance(variables[m], class_dic[method]):
            raise ValueError(f"An incorrect {method} was specified: {variables[m]!r}")
    if len(variables) == 1:
        return variables[0]
    else:
        return variables
