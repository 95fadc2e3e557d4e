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
The adiabatic, closed, constant-volume batch reactor written as an ODE system over the species concentrations.

Temperature and pressure are not integrated. They are reconstructed from the concentrations at every evaluation
by requiring that the specific internal energy stays at its initial value and that the mixture is an ideal gas.
"""

from typing import NamedTuple, Tuple

import numpy as np

from ..chemistry import R_J_KMOL, KineticsRates, ThermodynamicProperties

PRESSURE_RELATIVE_TOLERANCE = 1e-4
"""Relative change in pressure below which the temperature/pressure reconstruction is considered converged."""


class ThermoState(NamedTuple):
    """Thermodynamic state reconstructed from a concentration vector."""
    temperature:            float       # K
    pressure:               float       # Pa
    mole_fractions:         np.ndarray
    total_concentration:    float       # kmol/m^3
    molecular_weight:       float       # kg/kmol
    iterations:             int         # Fixed-point passes performed


class AdiabaticBatchReactorModel:
    """
    Right-hand side and Jacobian of an adiabatic batch reactor, in the form expected by stiff ODE integrators.

    The thermodynamic and kinetic collaborators are borrowed, not owned: they must outlive the model and every
    evaluation overwrites their temperature and pressure.
    Initial temperature, initial pressure and internal energy must be set before the first evaluation and
    are not meant to change while an integration is running.
    """
    def __init__(self, thermo: ThermodynamicProperties, kinetics: KineticsRates, max_iterations: int = 10):
        """
        Parameters
        ----------
        * thermo:           Thermodynamic property evaluator.
        * kinetics:         Reaction rate evaluator for the same species, in the same order.
        * max_iterations:   Cap on the fixed-point iterations used to find temperature and pressure.
        """
        self.thermo = thermo
        self.kinetics = kinetics
        self.max_iterations = max_iterations

        self.initial_temperature = np.nan  # K
        self.initial_pressure    = np.nan  # Pa
        self.internal_energy     = np.nan  # J/kg, conserved

    def set_initial_temperature(self, T0: float) -> None:
        self.initial_temperature = T0

    def set_initial_pressure(self, P0: float) -> None:
        self.initial_pressure = P0

    def set_internal_energy(self, U: float) -> None:
        self.internal_energy = U

    def number_of_equations(self) -> int:
        return self.thermo.number_of_species()

    def reconstruct_state(self, c: np.ndarray) -> ThermoState:
        """
        Find the temperature and pressure consistent with the concentrations, the conserved internal energy,
        and the ideal gas law, by successive substitution starting from the initial temperature and pressure.

        No error is raised if the iteration does not converge within `max_iterations`, the last estimate is used.
        A vector with no species left (total concentration of 0) produces NaN.

        Parameters
        ----------
        * c: Species concentrations in kmol/m^3. Negative entries are treated as 0.

        Returns
        -------
        * state: The reconstructed state.
        """
        c = np.maximum(np.asarray(c, dtype=float), 0.0)
        c_tot = c.sum()
        x = c / c_tot
        mw = self.thermo.molecular_weight_from_mole_fractions(x)

        P = self.initial_pressure
        T = self.initial_temperature
        iterations = 0
        for iterations in range(1, self.max_iterations + 1):
            P_old = P
            H = self.internal_energy + P / (c_tot * mw)
            T = self.thermo.temperature_from_enthalpy_and_mole_fractions(H * mw, P, x, T)
            P = c_tot * R_J_KMOL * T
            if abs(P - P_old) / P < PRESSURE_RELATIVE_TOLERANCE:
                break

        return ThermoState(T, P, x, c_tot, mw, iterations)

    def _update_collaborators(self, T: float, P: float) -> None:
        self.thermo.set_temperature(T)
        self.thermo.set_pressure(P)
        self.kinetics.set_temperature(T)
        self.kinetics.set_pressure(P)

    def derivatives(self, t: float, c: np.ndarray) -> np.ndarray:
        """
        Species equations dc_i/dt = R_i(c, T, P).

        Parameters
        ----------
        * t: Time, unused since the system is autonomous.
        * c: Species concentrations in kmol/m^3.

        Returns
        -------
        * dcdt: Net formation rate of each species in kmol/m^3/s.
        """
        c = np.maximum(np.asarray(c, dtype=float), 0.0)
        state = self.reconstruct_state(c)
        self._update_collaborators(state.temperature, state.pressure)

        self.kinetics.reaction_rates(c)
        return np.array(self.kinetics.formation_rates(), dtype=float)

    def jacobian(self, t: float, c: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """
        Jacobian of `derivatives`.

        The state is reconstructed again rather than reused from a previous call so that each evaluation
        stands on its own.

        Parameters
        ----------
        * t: Time, unused since the system is autonomous.
        * c: Species concentrations in kmol/m^3.

        Returns
        -------
        * dfdt: Explicit time derivative of the rates, always zero.
        * dfdc: Dense (N, N) matrix of dR_i/dc_j in 1/s.
        """
        c = np.maximum(np.asarray(c, dtype=float), 0.0)
        state = self.reconstruct_state(c)
        self._update_collaborators(state.temperature, state.pressure)

        dfdt = np.zeros(len(c))
        dfdc = np.array(self.kinetics.formation_rate_sensitivities(c), dtype=float)
        return dfdt, dfdc


def internal_energy_from_state(thermo: ThermodynamicProperties, T: float, P: float, x: np.ndarray) -> float:
    """
    Specific internal energy, u = h - P/rho, of an ideal gas mixture.

    Parameters
    ----------
    * thermo:   Thermodynamic property evaluator.
    * T:        Temperature in K.
    * P:        Pressure in Pa.
    * x:        Mole fractions.

    Returns
    -------
    * U: Specific internal energy in J/kg.
    """
    x = np.asarray(x, dtype=float)
    mw = thermo.molecular_weight_from_mole_fractions(x)
    c_tot = P / (R_J_KMOL * T)
    return thermo.enthalpy_from_mole_fractions(T, P, x) / mw - P / (c_tot * mw)
