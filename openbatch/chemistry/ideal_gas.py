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
Ideal gas mixture thermodynamics based on NASA 7-coefficient polynomials.

The polynomial coefficients are given directly, no thermodynamic database is read.
"""

from dataclasses import dataclass, field
from typing import List, Sequence

import numpy as np
from scipy.optimize import newton

from . import R_J_KMOL, ThermodynamicProperties


@dataclass(frozen=True)
class Species:
    """
    A single species described by NASA 7-coefficient polynomials.

    cp/R  = a1 + a2 T + a3 T^2 + a4 T^3 + a5 T^4
    h/RT  = a1 + a2 T/2 + a3 T^2/3 + a4 T^3/4 + a5 T^4/5 + a6/T

    The 7th coefficient (entropy constant) is carried but unused.
    """
    name:               str
    molecular_weight:   float                               # kg/kmol
    nasa_low:           Sequence[float] = field(repr=False)  # Used for T < t_mid
    nasa_high:          Sequence[float] = field(repr=False)  # Used for T >= t_mid
    t_mid:              float = 1000.0


def constant_cp_species(name: str, molecular_weight: float, cp: float, h_ref: float = 0.0, t_ref: float = 298.15) -> Species:
    """
    Create a species with a temperature independent heat capacity.

    Parameters
    ----------
    * name:             Name of the species.
    * molecular_weight: Molecular weight in kg/kmol.
    * cp:               Molar heat capacity in J/(kmol K).
    * h_ref:            Molar enthalpy at t_ref in J/kmol.
    * t_ref:            Reference temperature in K.

    Returns
    -------
    * species: Species with h(T) = h_ref + cp * (T - t_ref).
    """
    coefficients = [cp / R_J_KMOL, 0.0, 0.0, 0.0, 0.0, (h_ref - cp * t_ref) / R_J_KMOL, 0.0]
    return Species(name, molecular_weight, coefficients, coefficients)


class IdealGasThermodynamics(ThermodynamicProperties):
    """
    Mixture-averaged ideal gas properties.
    """
    def __init__(self, species: List[Species], tolerance: float = 1e-8, max_newton_iterations: int = 100):
        """
        Parameters
        ----------
        * species:                  The species in the mixture, in the same order as the concentration vector.
        * tolerance:                Absolute tolerance, in K, for the enthalpy inversion.
        * max_newton_iterations:    Maximum number of Newton iterations for the enthalpy inversion.
        """
        if len(species) == 0:
            raise ValueError("At least one species is needed.")

        self.species_names = [s.name for s in species]
        self.molecular_weights = np.array([s.molecular_weight for s in species], dtype=float)

        self._low   = np.array([s.nasa_low  for s in species], dtype=float)
        self._high  = np.array([s.nasa_high for s in species], dtype=float)
        self._t_mid = np.array([s.t_mid     for s in species], dtype=float)
        if self._low.shape != (len(species), 7) or self._high.shape != (len(species), 7):
            raise ValueError("Each species needs exactly 7 low and 7 high temperature NASA coefficients.")

        self.tolerance = tolerance
        self.max_newton_iterations = max_newton_iterations

        self._T = 298.15
        self._P = 101325.0

    def _coefficients(self, T: float) -> np.ndarray:
        return np.where((T < self._t_mid)[:, np.newaxis], self._low, self._high)

    def species_heat_capacities(self, T: float) -> np.ndarray:
        """Molar heat capacity of each species at constant pressure, J/(kmol K)."""
        a = self._coefficients(T)
        return R_J_KMOL * (a[:, 0] + T * (a[:, 1] + T * (a[:, 2] + T * (a[:, 3] + T * a[:, 4]))))

    def species_enthalpies(self, T: float) -> np.ndarray:
        """Molar enthalpy of each species, J/kmol."""
        a = self._coefficients(T)
        return R_J_KMOL * (T * (a[:, 0] + T * (a[:, 1] / 2 + T * (a[:, 2] / 3 + T * (a[:, 3] / 4 + T * a[:, 4] / 5))))
                           + a[:, 5])

    def number_of_species(self) -> int:
        return len(self.species_names)

    def molecular_weight_from_mole_fractions(self, x: np.ndarray) -> float:
        return float(np.dot(x, self.molecular_weights))

    def enthalpy_from_mole_fractions(self, T: float, P: float, x: np.ndarray) -> float:
        return float(np.dot(x, self.species_enthalpies(T)))

    def temperature_from_enthalpy_and_mole_fractions(self, H: float, P: float, x: np.ndarray, T_guess: float) -> float:
        # Degenerate mixtures (e.g. all species depleted) propagate as NaN instead of failing the Newton solve
        if not np.isfinite(H) or not np.all(np.isfinite(x)):
            return np.nan

        return float(newton(lambda T: np.dot(x, self.species_enthalpies(T)) - H,
                            T_guess,
                            fprime=lambda T: np.dot(x, self.species_heat_capacities(T)),
                            tol=self.tolerance,
                            maxiter=self.max_newton_iterations))

    def set_temperature(self, T: float) -> None:
        self._T = T

    def set_pressure(self, P: float) -> None:
        self._P = P

    @property
    def temperature(self) -> float:
        return self._T

    @property
    def pressure(self) -> float:
        return self._P
