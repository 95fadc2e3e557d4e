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
Interfaces for the thermodynamic and kinetic collaborators used by the batch reactor model, along with the concrete
implementations provided by OpenBatch.

The reactor model only ever talks to these two interfaces.
Both collaborators carry a mutable "current" temperature and pressure which the model updates before asking
for rates or sensitivities; a collaborator pair must therefore not be shared between models that are evaluated
concurrently.
"""

from abc import ABC, abstractmethod

import numpy as np

R_J_KMOL = 8314.46261815324
"""Universal gas constant in J/(kmol K), consistent with concentrations in kmol/m^3."""


class ThermodynamicProperties(ABC):
    """
    Thermodynamic property evaluator for an ideal gas mixture.
    """

    @abstractmethod
    def number_of_species(self) -> int:
        """Number of species in the mixture."""

    @abstractmethod
    def molecular_weight_from_mole_fractions(self, x: np.ndarray) -> float:
        """Mixture molecular weight in kg/kmol."""

    @abstractmethod
    def enthalpy_from_mole_fractions(self, T: float, P: float, x: np.ndarray) -> float:
        """Mixture molar enthalpy in J/kmol."""

    @abstractmethod
    def temperature_from_enthalpy_and_mole_fractions(self, H: float, P: float, x: np.ndarray, T_guess: float) -> float:
        """
        Invert the mixture enthalpy for the temperature.

        Parameters
        ----------
        * H:        Mixture molar enthalpy in J/kmol.
        * P:        Pressure in Pa.
        * x:        Mole fractions.
        * T_guess:  Starting point for the root solve, in K.

        Returns
        -------
        * T: The temperature, in K, at which the mixture has the molar enthalpy H.
        """

    @abstractmethod
    def set_temperature(self, T: float) -> None:
        pass

    @abstractmethod
    def set_pressure(self, P: float) -> None:
        pass

    @property
    @abstractmethod
    def temperature(self) -> float:
        pass

    @property
    @abstractmethod
    def pressure(self) -> float:
        pass


class KineticsRates(ABC):
    """
    Reaction rate evaluator.

    The update protocol is: set the temperature and pressure, call `reaction_rates` with the concentrations,
    then read the results through `formation_rates`.
    """

    @abstractmethod
    def set_temperature(self, T: float) -> None:
        pass

    @abstractmethod
    def set_pressure(self, P: float) -> None:
        pass

    @abstractmethod
    def reaction_rates(self, c: np.ndarray) -> None:
        """Evaluate and store the net rate of every reaction for concentrations c (kmol/m^3)."""

    @abstractmethod
    def formation_rates(self) -> np.ndarray:
        """Net formation rate of each species, in kmol/m^3/s, from the last call to `reaction_rates`."""

    @abstractmethod
    def formation_rate_sensitivities(self, c: np.ndarray) -> np.ndarray:
        """Dense matrix of dR_i/dc_j, in 1/s, at the current temperature and pressure."""
