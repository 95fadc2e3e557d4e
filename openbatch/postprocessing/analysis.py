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

from typing import List, Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np


def ignition_delay(t: np.ndarray, T: np.ndarray, temperature_rise: Optional[float] = None) -> float:
    """
    Calculate the ignition delay time from a temperature history.

    Two definitions are available:
    1. temperature_rise is None:    The time of the maximum rate of temperature increase, dT/dt.
    2. temperature_rise given:      The first time at which the temperature reaches T[0] + temperature_rise,
                                    linearly interpolated between output times.

    Args:
        t:                  Output times, vector of T entries.
        T:                  Temperature at each output time.
        temperature_rise:   Temperature increase, in K, defining ignition. See above.

    Returns:
        ~: The ignition delay time. NaN if the temperature never reaches the threshold, or if there are
           not enough points to take a derivative.
    """
    t = np.asarray(t, dtype=float)
    T = np.asarray(T, dtype=float)

    if temperature_rise is None:
        if len(t) < 3:
            return np.nan
        dTdt = np.gradient(T, t)
        return float(t[np.argmax(dTdt)])

    threshold = T[0] + temperature_rise
    above = np.nonzero(T >= threshold)[0]
    if len(above) == 0:
        return np.nan
    i = above[0]
    if i == 0:
        return float(t[0])
    return float(t[i-1] + (t[i] - t[i-1]) * (threshold - T[i-1]) / (T[i] - T[i-1]))


def plot_results(system_results:    Tuple[
                                        np.ndarray,
                                        np.ndarray,
                                        np.ndarray,
                                        np.ndarray],
                 species_names:     List[str],
                 species_to_plot:   Optional[List[str]] = None) -> None:
    """
    Plot the temperature, pressure, and species concentrations over time.

    Args:
        system_results:     The results from the batch reactor simulation (c, t, T, P).
        species_names:      Names of all species in the order of the concentration array.
        species_to_plot:    Subset of species to plot, all species are plotted if None.
    """
    print('Start plotting results')
    c, t, T, P = system_results

    plt.figure()
    plt.plot(t, T)
    plt.xlabel("Time [s]")
    plt.ylabel("Temperature [K]")
    plt.title("Temperature")
    plt.show()

    plt.figure()
    plt.plot(t, P)
    plt.xlabel("Time [s]")
    plt.ylabel("Pressure [Pa]")
    plt.title("Pressure")
    plt.show()

    plt.figure()
    legend = []
    for specie_id, specie_name in enumerate(species_names):
        if species_to_plot is None or specie_name in species_to_plot:
            plt.plot(t, c[specie_id, :])
            legend.append(specie_name)
    plt.xlabel("Time [s]")
    plt.ylabel("Concentration [kmol/m^3]")
    plt.legend(legend)
    plt.title("Species Concentrations")
    plt.show()
    print('Done plotting results')
