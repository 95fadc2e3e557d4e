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
Collaborators backed by a Cantera `Solution`.

Cantera takes care of loading the mechanism (species thermodynamics and reactions); these classes only expose it
through the interfaces the batch reactor model expects.
Both collaborators share the same `Solution` object and therefore the same thermodynamic state.
"""

from typing import Optional, Tuple

import numpy as np

from . import KineticsRates, ThermodynamicProperties


class CanteraThermodynamics(ThermodynamicProperties):
    def __init__(self, gas: 'cantera.Solution'):
        self.gas = gas

    def number_of_species(self) -> int:
        return self.gas.n_species

    def molecular_weight_from_mole_fractions(self, x: np.ndarray) -> float:
        return float(np.dot(x, self.gas.molecular_weights))

    def enthalpy_from_mole_fractions(self, T: float, P: float, x: np.ndarray) -> float:
        self.gas.TPX = T, P, x
        return float(self.gas.enthalpy_mole)

    def temperature_from_enthalpy_and_mole_fractions(self, H: float, P: float, x: np.ndarray, T_guess: float) -> float:
        if not np.isfinite(H) or not np.all(np.isfinite(x)):
            return np.nan

        # Cantera starts its HP solve from the current temperature
        self.gas.TPX = T_guess, P, x
        self.gas.HP = H / self.gas.mean_molecular_weight, P
        return float(self.gas.T)

    def set_temperature(self, T: float) -> None:
        self.gas.TP = T, self.gas.P

    def set_pressure(self, P: float) -> None:
        self.gas.TP = self.gas.T, P

    @property
    def temperature(self) -> float:
        return float(self.gas.T)

    @property
    def pressure(self) -> float:
        return float(self.gas.P)


class CanteraKinetics(KineticsRates):
    def __init__(self, gas: 'cantera.Solution'):
        self.gas = gas
        self._T = float(gas.T)
        self._P = float(gas.P)
        self._formation_rates = np.zeros(gas.n_species)

    def set_temperature(self, T: float) -> None:
        self._T = T

    def set_pressure(self, P: float) -> None:
        self._P = P

    def _set_state(self, c: np.ndarray) -> None:
        # Setting the concentrations keeps the temperature and fixes the molar density to sum(c)
        self.gas.TP = self._T, self._P
        self.gas.concentrations = c

    def reaction_rates(self, c: np.ndarray) -> None:
        self._set_state(c)
        self._formation_rates = np.array(self.gas.net_production_rates)

    def formation_rates(self) -> np.ndarray:
        return self._formation_rates

    def formation_rate_sensitivities(self, c: np.ndarray) -> np.ndarray:
        self._set_state(c)
        dR_dc = self.gas.net_production_rates_ddCi
        if hasattr(dR_dc, 'toarray'):  # Sparse output when Cantera was built with sparse Jacobian support
            dR_dc = dR_dc.toarray()
        return np.asarray(dR_dc, dtype=float)


def load_cantera_collaborators(mechanism: str, phase: Optional[str] = None) \
        -> Tuple[CanteraThermodynamics, CanteraKinetics, 'cantera.Solution']:
    """
    Load a mechanism with Cantera and wrap it.

    Parameters
    ----------
    * mechanism:    Path to, or name of, a Cantera YAML mechanism (e.g. 'h2o2.yaml').
    * phase:        Name of the phase inside the mechanism file, None for the first one.

    Returns
    -------
    * thermo:   The thermodynamic collaborator.
    * kinetics: The kinetics collaborator.
    * gas:      The underlying Cantera Solution, shared by both.
    """
    try:
        import cantera as ct
    except ModuleNotFoundError:
        raise ValueError("Cantera is not installed but is needed to load the mechanism. Please install Cantera.")

    gas = ct.Solution(mechanism, phase) if phase else ct.Solution(mechanism)
    return CanteraThermodynamics(gas), CanteraKinetics(gas), gas
