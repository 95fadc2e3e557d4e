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

import matplotlib.pyplot as plt
import numpy as np
import pytest

from openbatch.postprocessing import ignition_delay, plot_results


@pytest.fixture
def temperature_history():
    # Smooth step from 1000 K to 2500 K centred at 1 ms
    t = np.linspace(0.0, 2e-3, 2001)
    T = 1000.0 + 1500.0 / (1.0 + np.exp(-(t - 1e-3) / 2e-5))
    return t, T


def test_ignition_delay_from_maximum_slope(temperature_history):
    t, T = temperature_history
    assert ignition_delay(t, T) == pytest.approx(1e-3, abs=2e-6)


def test_ignition_delay_from_temperature_rise(temperature_history):
    t, T = temperature_history
    # The midpoint of the step is reached at the centre
    assert ignition_delay(t, T, temperature_rise=750.0) == pytest.approx(1e-3, abs=2e-6)


def test_ignition_delay_interpolates():
    t = np.array([0.0, 1.0, 2.0])
    T = np.array([1000.0, 1100.0, 1500.0])
    assert ignition_delay(t, T, temperature_rise=300.0) == pytest.approx(1.5)
    assert ignition_delay(t, T, temperature_rise=0.0) == 0.0


def test_no_ignition():
    t = np.array([0.0, 1.0, 2.0])
    T = np.array([1000.0, 1010.0, 1020.0])
    assert np.isnan(ignition_delay(t, T, temperature_rise=400.0))
    assert np.isnan(ignition_delay(t[:2], T[:2]))


def test_plot_results(monkeypatch):
    monkeypatch.setattr(plt, 'show', lambda: None)
    t = np.linspace(0.0, 1.0, 5)
    c = np.vstack([np.exp(-t), 1 - np.exp(-t)])
    T = np.linspace(1000.0, 1200.0, 5)
    P = np.linspace(1e5, 1.2e5, 5)

    plot_results((c, t, T, P), ['A', 'B'], species_to_plot=['B'])
    plt.close('all')
