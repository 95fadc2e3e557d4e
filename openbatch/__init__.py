########################################################################################################################
# Copyright 2026 the authors (see AUTHORS file for full list).                                                         #
#                                                                                                                      #
#                                                                                                                      #
# This file is part of OpenBatch.                                                                                      #
#                                                                                                                      #
#                                                                                                                      #
# OpenBatch is free software: you can redistribute it and/or modify it under the terms of the GNU Lesser General       #
# Public License as published by the Free Software Foundation, either version 2.1 of the License, or (at your option)  #
# any later version.                                                                                                   #
#                                                                                                                      #
# OpenBatch is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied      #
# warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.                                                     #
# See the GNU Lesser General Public License for more details.                                                          #
#                                                                                                                      #
# You should have received a copy of the GNU Lesser General Public License along with OpenBatch. If not, see           #
# <https://www.gnu.org/licenses/>.                                                                                     #
########################################################################################################################

r"""
OpenBatch: adiabatic batch reactor simulation with temperature and pressure reconstructed from the conserved
internal energy.

The main entry point is `openbatch.run.run`, driven by a configuration file.
The reactor model, `AdiabaticBatchReactorModel`, can also be used directly with any pair of thermodynamic and
kinetic collaborators implementing the interfaces in `openbatch.chemistry`.
"""

from .config_functions import ConfigParser
from .system_solvers import AdiabaticBatchReactorModel
from .run import run

__version__ = "0.1.0"
