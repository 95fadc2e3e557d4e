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

import numpy as np
import pytest

from openbatch.chemistry import R_J_KMOL
from openbatch.chemistry.ideal_gas import IdealGasThermodynamics, Species, constant_cp_species


@pytest.fixture
def two_range_mixture():
    # cp/R increases linearly with T and has a jump at t_mid
    species = [Species('X', 2.0,  [3.0, 1e-4, 0, 0, 0, -1000.0, 0], [3.2, 1e-4, 0, 0, 0, -1200.0, 0]),
               Species('Y', 32.0, [3.5, 2e-4, 0, 0, 0,   500.0, 0], [3.7, 2e-4, 0, 0, 0,   300.0, 0])]
    return IdealGasThermodynamics(species)


def test_molecular_weight(two_range_mixture):
    assert two_range_mixture.molecular_weight_from_mole_fractions(np.array([0.25, 0.75])) == pytest.approx(24.5)


def test_number_of_species(two_range_mixture):
    assert two_range_mixture.number_of_species() == 2
    assert two_range_mixture.species_names == ['X', 'Y']


def test_constant_cp_species():
    thermo = IdealGasThermodynamics([constant_cp_species('N2', 28.0, 29100.0, h_ref=-1e6)])

    assert thermo.species_enthalpies(298.15)[0] == pytest.approx(-1e6)
    assert thermo.species_enthalpies(1298.15)[0] == pytest.approx(-1e6 + 29100.0 * 1000)
    assert thermo.species_heat_capacities(500.0)[0] == pytest.approx(29100.0)
    assert thermo.species_heat_capacities(2500.0)[0] == pytest.approx(29100.0)


def test_polynomial_range_selection(two_range_mixture):
    cp_low = two_range_mixture.species_heat_capacities(500.0)
    cp_high = two_range_mixture.species_heat_capacities(1500.0)

    np.testing.assert_allclose(cp_low,  R_J_KMOL * np.array([3.0 + 1e-4 * 500,  3.5 + 2e-4 * 500]))
    np.testing.assert_allclose(cp_high, R_J_KMOL * np.array([3.2 + 1e-4 * 1500, 3.7 + 2e-4 * 1500]))


@pytest.mark.parametrize('T', [400.0, 999.0, 1234.5, 2800.0])
def test_temperature_from_enthalpy(two_range_mixture, T):
    x = np.array([0.3, 0.7])
    H = two_range_mixture.enthalpy_from_mole_fractions(T, 101325.0, x)

    assert two_range_mixture.temperature_from_enthalpy_and_mole_fractions(H, 101325.0, x, 900.0) \
        == pytest.approx(T, abs=1e-6)


def test_temperature_from_non_finite_enthalpy_is_nan(two_range_mixture):
    x = np.array([0.3, 0.7])
    assert np.isnan(two_range_mixture.temperature_from_enthalpy_and_mole_fractions(np.nan, 101325.0, x, 900.0))
    assert np.isnan(two_range_mixture.temperature_from_enthalpy_and_mole_fractions(1e7, 101325.0,
                                                                                    np.array([np.nan, np.nan]), 900.0))


def test_state_setters(two_range_mixture):
    two_range_mixture.set_temperature(1500.0)
    two_range_mixture.set_pressure(2e5)
    assert two_range_mixture.temperature == 1500.0
    assert two_range_mixture.pressure == 2e5


def test_invalid_species():
    with pytest.raises(ValueError):
        IdealGasThermodynamics([])
    with pytest.raises(ValueError):
        IdealGasThermodynamics([Species('X', 2.0, [3.0, 0.0], [3.0, 0.0])])
