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

from typing import Tuple

import numpy as np
from scipy.integrate import solve_ivp

from ..config_functions import ConfigParser
from .batch_adiabatic import AdiabaticBatchReactorModel
from .helper_functions import generate_t_eval

IMPLICIT_METHODS = ('BDF', 'Radau', 'LSODA')
"""solve_ivp methods which make use of a user supplied Jacobian."""


def solve_system(model:         AdiabaticBatchReactorModel,
                 c0:            np.ndarray,
                 config_parser: ConfigParser) \
        -> Tuple[
            np.ndarray,
            np.ndarray,
            np.ndarray,
            np.ndarray]:
    """
    Perform a transient simulation of an adiabatic batch reactor.

    The integrator is the point at which numerical failures are detected: the model itself never raises,
    so a failed integration or a non-finite solution is reported here.
    If an implicit method cannot factorize the Jacobian (e.g. it contains NaN), only the initial state is returned.

    Args:
        model:          The configured reactor model (initial temperature, pressure and internal energy already set).
        c0:             Initial species concentrations in kmol/m^3.
        config_parser:  OpenBatch ConfigParser for getting settings.

    Returns:
        c:  NxT numpy array containing the concentration of each species at each point in time.
            N is number of species and T is number of time steps.
        t:  The times at which the concentrations were saved at, vector of T entries.
        T:  The reconstructed temperature at each time, vector of T entries.
        P:  The reconstructed pressure at each time, vector of T entries.
    """
    print("Solving simulation")

    t_span          = config_parser.get_list(['SIMULATION', 't_span'],          float)
    first_timestep  = config_parser.get_item(['SIMULATION', 'first_timestep'],  float)
    atol            = config_parser.get_item(['SIMULATION', 'atol'],            float)
    rtol            = config_parser.get_item(['SIMULATION', 'rtol'],            float)
    solver          = config_parser.get_item(['SIMULATION', 'solver'],          str)
    use_jacobian    = config_parser.get_item(['SIMULATION', 'use_jacobian'],    bool)
    t_eval          = generate_t_eval(config_parser)

    if first_timestep <= 0:
        raise ValueError(f"SIMULATION, first_timestep must be positive, got {first_timestep}.")

    c0 = np.asarray(c0, dtype=float)
    if len(c0) != model.number_of_equations():
        raise ValueError(f"Initial condition has {len(c0)} entries but the mechanism has {model.number_of_equations()} species.")

    options = {}
    if use_jacobian and solver in IMPLICIT_METHODS:
        options['jac'] = lambda t, c: model.jacobian(t, c)[1]

    try:
        output = solve_ivp(model.derivatives, t_span, c0, method=solver, t_eval=t_eval,
                           atol=atol, rtol=rtol, first_step=first_timestep, **options)
    except ValueError as error:
        # Non-finite Jacobians are rejected by the LU factorization of the implicit methods
        print(f"WARNING: Integration failed, only the initial state is kept: {error}")
        t = np.array([t_span[0]])
        c = c0[:, np.newaxis]
    else:
        t = output.t
        c = output.y  # (num_species, num_timesteps)
        if not output.success:
            t_stop = t[-1] if len(t) > 0 else t_span[0]
            print(f"WARNING: Integration stopped at t = {t_stop:.3e} before reaching {t_span[1]:.3e}: {output.message}")
    if not np.all(np.isfinite(c)):
        print("WARNING: The solution contains non-finite concentrations.")

    T = np.zeros(len(t))
    P = np.zeros(len(t))
    for i in range(len(t)):
        state = model.reconstruct_state(c[:, i])
        T[i], P[i] = state.temperature, state.pressure

    print("Done solving simulation")
    return c, t, T, P
