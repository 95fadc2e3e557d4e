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

import os
from pathlib import Path

import numpy as np
import matplotlib.pyplot as plt
import cantera as ct

from openbatch import run, ConfigParser

# Run OpenBatch from this folder so that the relative paths in the CONFIG file resolve
os.chdir(Path(__file__).parents[0])
config_parser = ConfigParser('CONFIG')
run(config_parser)

t_batch   = np.load('output_batch/batch_t.npy')
T_batch   = np.load('output_batch/batch_temperature.npy')
P_batch   = np.load('output_batch/batch_pressure.npy')
tau_batch = np.load('output_batch/batch_ignition_delay.npy')[0]

# Reference: Cantera's own constant volume reactor, which integrates the energy equation directly
T0 = config_parser.get_item(['REACTOR', 'temperature'], float)
P0 = config_parser.get_item(['REACTOR', 'pressure'],    float)
gas = ct.Solution(config_parser['CHEMISTRY']['mechanism'])
gas.TPX = T0, P0, config_parser.get_expression(['REACTOR', 'mole_fractions'])
reactor = ct.IdealGasReactor(gas)
network = ct.ReactorNet([reactor])

T_ref = np.zeros(len(t_batch))
P_ref = np.zeros(len(t_batch))
T_ref[0], P_ref[0] = reactor.T, reactor.thermo.P
for i in range(1, len(t_batch)):
    network.advance(t_batch[i])
    T_ref[i], P_ref[i] = reactor.T, reactor.thermo.P

print(f"Ignition delay (OpenBatch): {tau_batch:.4e} s")
print(f"Maximum temperature difference: {np.max(np.abs(T_batch - T_ref)):.3e} K")
print(f"Maximum relative pressure difference: {np.max(np.abs(P_batch - P_ref) / P_ref):.3e}")

plt.figure()
plt.plot(t_batch * 1e3, T_batch, label='OpenBatch')
plt.plot(t_batch * 1e3, T_ref, '--', label='Cantera IdealGasReactor')
plt.xlabel('Time [ms]')
plt.ylabel('Temperature [K]')
plt.legend()
plt.show()
