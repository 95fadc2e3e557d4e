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
from scipy.optimize import OptimizeResult

from openbatch import ConfigParser
from openbatch.chemistry import R_J_KMOL
from openbatch.system_solvers import batch_system, internal_energy_from_state, solve_system

from .reactor_helpers import CP, HEAT_OF_REACTION, configured_model, isomerization

T0 = 1000.0
P0 = 101325.0
K = 5.0  # 1/s, rate constant of A -> B

CONFIG = """
[SETUP]
working_directory = {working_directory}

[CHEMISTRY]
mechanism = not_loaded.yaml

[REACTOR]
temperature = 1000
pressure = 101325
mole_fractions = {{'A': 1}}

[SIMULATION]
t_span = 0.0, 0.5
t_eval = 0.0, 0.1, 0.2, 0.3, 0.4, 0.5
solver = {solver}
use_jacobian = {use_jacobian}
rtol = 1e-8
atol = 1e-14
"""


def make_config(tmp_path, solver: str = 'BDF', use_jacobian: bool = True, extra: str = '') -> ConfigParser:
    path = tmp_path / 'CONFIG'
    path.write_text(CONFIG.format(working_directory=str(tmp_path) + '/', solver=solver, use_jacobian=use_jacobian)
                    + extra)
    return ConfigParser(str(path))


@pytest.mark.parametrize('solver, use_jacobian', [('BDF', True), ('BDF', False), ('Radau', True),
                                                  ('LSODA', True), ('RK45', True)])
def test_isomerization(tmp_path, solver, use_jacobian):
    thermo, kinetics = isomerization()
    model, c0 = configured_model(thermo, kinetics, T0, P0, [1.0, 0.0])
    U = model.internal_energy

    c, t, T, P = solve_system(model, c0, make_config(tmp_path, solver, use_jacobian))

    np.testing.assert_allclose(t, [0.0, 0.1, 0.2, 0.3, 0.4, 0.5])
    assert c.shape == (2, 6)

    # First order decay, independent of temperature
    np.testing.assert_allclose(c[0], c0[0] * np.exp(-K * t), rtol=1e-4)
    # A -> B conserves the number of moles
    np.testing.assert_allclose(c.sum(axis=0), c0.sum(), rtol=1e-6)

    # Heat release at constant volume raises the temperature and, through the ideal gas law, the pressure
    converted = 1 - np.exp(-K * t)
    np.testing.assert_allclose(T, T0 + converted * HEAT_OF_REACTION / (CP - R_J_KMOL), rtol=1e-3)
    assert np.all(np.diff(T) > 0)
    np.testing.assert_allclose(P, c.sum(axis=0) * R_J_KMOL * T, rtol=1e-10)

    for i in range(len(t)):
        x = c[:, i] / c[:, i].sum()
        assert internal_energy_from_state(thermo, T[i], P[i], x) == pytest.approx(U, abs=200.0)


def test_wrong_number_of_initial_concentrations(tmp_path):
    model, c0 = configured_model(*isomerization(), T0, P0, [1.0, 0.0])
    with pytest.raises(ValueError):
        solve_system(model, np.append(c0, 0.0), make_config(tmp_path))


def test_non_positive_first_timestep(tmp_path):
    model, c0 = configured_model(*isomerization(), T0, P0, [1.0, 0.0])
    with pytest.raises(ValueError, match='first_timestep'):
        solve_system(model, c0, make_config(tmp_path, extra='first_timestep = 0\n'))


def test_non_finite_jacobian_is_reported(tmp_path, capsys):
    # A depleted mixture has NaN temperature, rates and Jacobian, which the BDF factorization rejects
    model, _ = configured_model(*isomerization(), T0, P0, [1.0, 0.0])
    with np.errstate(all='ignore'):
        c, t, T, P = solve_system(model, np.zeros(2), make_config(tmp_path, 'BDF', True))

    assert 'WARNING: Integration failed' in capsys.readouterr().out
    np.testing.assert_array_equal(t, [0.0])
    np.testing.assert_array_equal(c, np.zeros((2, 1)))
    assert np.isnan(T[0])


def test_stalled_integration_is_reported(tmp_path, capsys):
    # Explicit methods keep rejecting steps with NaN rates until the step size underflows
    model, _ = configured_model(*isomerization(), T0, P0, [1.0, 0.0])
    with np.errstate(all='ignore'):
        c, t, T, P = solve_system(model, np.zeros(2), make_config(tmp_path, 'RK45'))

    assert 'WARNING: Integration stopped' in capsys.readouterr().out
    assert len(t) < 6
    assert c.shape == (2, len(t))


def test_non_finite_solution_is_reported(tmp_path, capsys, monkeypatch):
    model, c0 = configured_model(*isomerization(), T0, P0, [1.0, 0.0])
    y = np.array([[c0[0], np.nan], [0.0, np.nan]])
    monkeypatch.setattr(batch_system, 'solve_ivp',
                        lambda *args, **kwargs: OptimizeResult(t=np.array([0.0, 0.5]), y=y, success=True, message=''))

    with np.errstate(all='ignore'):
        c, t, T, P = solve_system(model, c0, make_config(tmp_path))

    out = capsys.readouterr().out
    assert 'WARNING: The solution contains non-finite concentrations.' in out
    assert 'Integration stopped' not in out
    assert T[0] == pytest.approx(T0, rel=1e-8)
    assert np.isnan(T[1])
