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
Mass-action kinetics for a set of elementary (optionally reversible) reactions with Arrhenius rate constants.

The rate and Jacobian kernels are compiled with numba since they are evaluated at every right-hand side call of
the stiff integrator.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

import numpy as np
from numba import njit

from . import R_J_KMOL, KineticsRates


@dataclass(frozen=True)
class Arrhenius:
    """
    Modified Arrhenius expression k(T) = A * T^b * exp(-Ea / (R T)).

    Ea is in J/kmol, the units of A depend on the reaction order (kmol/m^3 and s based).
    """
    A:  float
    b:  float = 0.0
    Ea: float = 0.0

    def __call__(self, T: float) -> float:
        return self.A * T ** self.b * np.exp(-self.Ea / (R_J_KMOL * T))


@dataclass(frozen=True)
class Reaction:
    """
    Elementary reaction.

    reactants / products:   mapping species name -> stoichiometric coefficient (positive).
    orders:                 optional mapping species name -> forward reaction order, defaults to the reactant coefficients.
                            Orders below 1 give infinite sensitivities where that species has a zero concentration,
                            stiff integrators reject such Jacobians.
    reverse:                optional rate constant for the reverse direction, which always uses the product coefficients.
    """
    reactants:  Dict[str, float]
    products:   Dict[str, float]
    forward:    Arrhenius
    reverse:    Optional[Arrhenius] = None
    orders:     Optional[Dict[str, float]] = None


@njit
def _concentration_products(c: np.ndarray, orders: np.ndarray) -> np.ndarray:
    n_reactions, n_species = orders.shape
    products = np.ones(n_reactions)
    for j in range(n_reactions):
        for i in range(n_species):
            if orders[j, i] != 0.0:
                products[j] *= c[i] ** orders[j, i]
    return products


@njit
def _net_rates(c: np.ndarray, kf: np.ndarray, kr: np.ndarray, orders_f: np.ndarray, orders_r: np.ndarray) -> np.ndarray:
    return kf * _concentration_products(c, orders_f) - kr * _concentration_products(c, orders_r)


@njit
def _derivative_of_product(c: np.ndarray, orders: np.ndarray, k: int) -> float:
    """d/dc_k of prod_i c_i^orders_i."""
    if orders[k] == 0.0:
        return 0.0

    value = orders[k]
    if orders[k] != 1.0:
        value *= c[k] ** (orders[k] - 1.0)
    for i in range(c.shape[0]):
        if i != k and orders[i] != 0.0:
            value *= c[i] ** orders[i]
    return value


@njit
def _formation_rate_sensitivities(c:        np.ndarray,
                                  kf:       np.ndarray,
                                  kr:       np.ndarray,
                                  orders_f: np.ndarray,
                                  orders_r: np.ndarray,
                                  stoich:   np.ndarray) -> np.ndarray:
    n_reactions, n_species = stoich.shape
    dR_dc = np.zeros((n_species, n_species))
    for j in range(n_reactions):
        for k in range(n_species):
            dr_dck = kf[j] * _derivative_of_product(c, orders_f[j], k) \
                     - kr[j] * _derivative_of_product(c, orders_r[j], k)
            if dr_dck != 0.0:
                for i in range(n_species):
                    dR_dc[i, k] += stoich[j, i] * dr_dck
    return dR_dc


class MassActionKinetics(KineticsRates):
    """
    Kinetics evaluator for a list of mass-action reactions.
    """
    def __init__(self, species_names: List[str], reactions: List[Reaction]):
        """
        Parameters
        ----------
        * species_names:    Names of the species, in the same order as the concentration vector.
        * reactions:        The reactions of the mechanism. An empty list gives zero formation rates.
        """
        self.species_names = list(species_names)
        self.reactions = list(reactions)

        index = {name: i for i, name in enumerate(self.species_names)}
        n_species, n_reactions = len(self.species_names), len(self.reactions)

        nu_reactants  = np.zeros((n_reactions, n_species))
        nu_products   = np.zeros((n_reactions, n_species))
        orders_f      = np.zeros((n_reactions, n_species))
        for j, reaction in enumerate(self.reactions):
            for coefficients, target in [(reaction.reactants, nu_reactants),
                                         (reaction.products,  nu_products),
                                         (reaction.orders if reaction.orders is not None else reaction.reactants, orders_f)]:
                for name, nu in coefficients.items():
                    if name not in index:
                        raise ValueError(f"Reaction {j} uses species '{name}' which is not part of the mechanism.")
                    target[j, index[name]] += nu

        self._stoich   = nu_products - nu_reactants
        self._orders_f = orders_f
        self._orders_r = nu_products.copy()

        self._T = 298.15
        self._P = 101325.0
        self._kf = np.zeros(n_reactions)
        self._kr = np.zeros(n_reactions)
        self._rates = np.zeros(n_reactions)
        self._update_rate_constants()

    def _update_rate_constants(self) -> None:
        self._kf = np.array([reaction.forward(self._T) for reaction in self.reactions], dtype=float)
        self._kr = np.array([reaction.reverse(self._T) if reaction.reverse is not None else 0.0
                             for reaction in self.reactions], dtype=float)

    @property
    def stoichiometric_matrix(self) -> np.ndarray:
        """Net stoichiometric coefficients, shape (num reactions, num species)."""
        return self._stoich

    @property
    def net_reaction_rates(self) -> np.ndarray:
        """Net rate of each reaction from the last call to `reaction_rates`, kmol/m^3/s."""
        return self._rates

    def set_temperature(self, T: float) -> None:
        self._T = T
        self._update_rate_constants()

    def set_pressure(self, P: float) -> None:
        self._P = P

    def reaction_rates(self, c: np.ndarray) -> None:
        c = np.ascontiguousarray(c, dtype=float)
        if len(self.reactions) == 0:
            self._rates = np.zeros(0)
        else:
            self._rates = _net_rates(c, self._kf, self._kr, self._orders_f, self._orders_r)

    def formation_rates(self) -> np.ndarray:
        return self._stoich.T @ self._rates

    def formation_rate_sensitivities(self, c: np.ndarray) -> np.ndarray:
        n_species = len(self.species_names)
        if len(self.reactions) == 0:
            return np.zeros((n_species, n_species))
        c = np.ascontiguousarray(c, dtype=float)
        return _formation_rate_sensitivities(c, self._kf, self._kr, self._orders_f, self._orders_r, self._stoich)
