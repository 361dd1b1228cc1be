from .relperm import (LET, corey, RelativePermeabilityModel, PowerRelativePermeabilityModel,
                      LETRelativePermeabilityModel, rel_perm_table)
