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
Small hand-written mechanisms and reactor set-up shared by the tests.
"""

from typing import Tuple

import numpy as np

from openbatch.chemistry import R_J_KMOL
from openbatch.chemistry.ideal_gas import IdealGasThermodynamics, constant_cp_species
from openbatch.chemistry.mass_action import Arrhenius, MassActionKinetics, Reaction
from openbatch.system_solvers import AdiabaticBatchReactorModel, internal_energy_from_state

CP = 29100.0            # J/(kmol K), same for A and B so that cv stays constant during A -> B
HEAT_OF_REACTION = 5e7  # J/kmol released by A -> B


def configured_model(thermo, kinetics, T0: float, P0: float, x0: np.ndarray, max_iterations: int = 10) \
        -> Tuple[AdiabaticBatchReactorModel, np.ndarray]:
    """Create a model whose initial state (T0, P0, x0) is consistent, along with the matching concentrations."""
    x0 = np.asarray(x0, dtype=float)
    model = AdiabaticBatchReactorModel(thermo, kinetics, max_iterations)
    model.set_initial_temperature(T0)
    model.set_initial_pressure(P0)
    model.set_internal_energy(internal_energy_from_state(thermo, T0, P0, x0))
    return model, x0 * P0 / (R_J_KMOL * T0)


def isomerization(rate: Arrhenius = Arrhenius(A=5.0)):
    """Exothermic A -> B."""
    species = [constant_cp_species('A', 28.0, CP, h_ref=0.0),
               constant_cp_species('B', 28.0, CP, h_ref=-HEAT_OF_REACTION)]
    thermo = IdealGasThermodynamics(species)
    kinetics = MassActionKinetics(['A', 'B'], [Reaction({'A': 1}, {'B': 1}, rate)])
    return thermo, kinetics


def recombination():
    """A + B <=> C with temperature independent rate constants."""
    species = [constant_cp_species('A', 2.0,  29000.0, h_ref=2e7),
               constant_cp_species('B', 32.0, 33000.0, h_ref=0.0),
               constant_cp_species('C', 34.0, 45000.0, h_ref=-1e7)]
    thermo = IdealGasThermodynamics(species)
    kinetics = MassActionKinetics(['A', 'B', 'C'],
                                  [Reaction({'A': 1, 'B': 1}, {'C': 1}, Arrhenius(A=1e3), reverse=Arrhenius(A=10.0))])
    return thermo, kinetics
