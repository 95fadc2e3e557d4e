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

from time import perf_counter_ns
from typing import Dict, List, Union

import numpy as np

from .chemistry import R_J_KMOL
from .chemistry.cantera_adapter import load_cantera_collaborators
from .config_functions import ConfigParser
from .postprocessing import ignition_delay, plot_results
from .system_solvers import AdiabaticBatchReactorModel, internal_energy_from_state, solve_system


def run(config_parser_or_file: Union[ConfigParser, str]) -> Dict[str, int]:
    """
    The main function of the OpenBatch package. Sequentially goes through each step required to
    set up the batch reactor, solve a simulation on it, output results, and perform any specified post-processing.

    Parameters
    ----------
    * config_parser_or_file: Either an OpenBatch ConfigParser or the path to the config file to load.

    Returns
    -------
    * timing_dict: Mapping between the name of each step and the time, in ns, that the step took.
    """
    timing_dict = {}

    if isinstance(config_parser_or_file, ConfigParser):
        config_parser = config_parser_or_file
    else:
        config_parser = ConfigParser(config_parser_or_file)
    if config_parser.need_to_update_paths:
        config_parser.update_paths()

    mechanism           = config_parser.get_item(['CHEMISTRY',  'mechanism'],           str)
    phase               = config_parser.get_item(['CHEMISTRY',  'phase'],               str)
    T0                  = config_parser.get_item(['REACTOR',    'temperature'],         float)
    P0                  = config_parser.get_item(['REACTOR',    'pressure'],            float)
    max_iterations      = config_parser.get_item(['REACTOR',    'max_iterations'],      int)
    mole_fractions      = config_parser.get_expression(['REACTOR', 'mole_fractions'])
    output_folder_path  = config_parser.get_item(['SETUP',      'output_folder_path'],  str)

    run_simulation      = config_parser.get_item(['SIMULATION', 'run'], bool)
    save_to_file        = run_simulation and config_parser.get_item(['POST-PROCESSING', 'save_to_file'], bool)
    should_plot_results = run_simulation and config_parser.get_item(['POST-PROCESSING', 'plot_results'], bool)
    calculate_ignition  = run_simulation and config_parser.get_item(['POST-PROCESSING', 'calculate_ignition_delay'], bool)
    temperature_rise    = config_parser.get_item(['POST-PROCESSING', 'ignition_temperature_rise'], str)
    temperature_rise    = None if temperature_rise == 'None' else float(temperature_rise)

    # Load the mechanism
    start = perf_counter_ns()
    thermo, kinetics, gas = load_cantera_collaborators(mechanism, None if phase == 'None' else phase)
    species_names: List[str] = list(gas.species_names)
    timing_dict['Load Mechanism'] = perf_counter_ns() - start

    # Build the initial state and the reactor model
    x0 = mole_fraction_vector(species_names, mole_fractions)
    c0 = x0 * P0 / (R_J_KMOL * T0)

    model = AdiabaticBatchReactorModel(thermo, kinetics, max_iterations)
    model.set_initial_temperature(T0)
    model.set_initial_pressure(P0)
    model.set_internal_energy(internal_energy_from_state(thermo, T0, P0, x0))

    if run_simulation:
        start = perf_counter_ns()
        system_results = solve_system(model, c0, config_parser)
        timing_dict['Solve model'] = perf_counter_ns() - start

        c, t, T, P = system_results
        if save_to_file:
            np.save(output_folder_path + 'batch_concentrations.npy', c)
            np.save(output_folder_path + 'batch_t.npy',              t)
            np.save(output_folder_path + 'batch_temperature.npy',    T)
            np.save(output_folder_path + 'batch_pressure.npy',       P)

        if calculate_ignition:
            tau_ign = ignition_delay(t, T, temperature_rise)
            print(f"Ignition delay time: {tau_ign:.4e} s")
            if save_to_file:
                np.save(output_folder_path + 'batch_ignition_delay.npy', np.array([tau_ign]))

        if should_plot_results:
            plot_results(system_results, species_names)

    return timing_dict


def mole_fraction_vector(species_names: List[str], mole_fractions: Dict[str, float]) -> np.ndarray:
    """
    Convert a (possibly unnormalized) mapping of species name to mole fraction into a normalized vector.

    Parameters
    ----------
    * species_names:    Names of all species in the mechanism, in order.
    * mole_fractions:   Mapping of species name to mole fraction. Species not listed are set to 0.

    Returns
    -------
    * x: Mole fractions ordered as species_names, summing to 1.
    """
    x = np.zeros(len(species_names))
    for name, value in mole_fractions.items():
        if name not in species_names:
            raise ValueError(f"Species '{name}' given in the mole fractions is not part of the mechanism.")
        x[species_names.index(name)] = value

    if x.sum() <= 0:
        raise ValueError("The mole fractions must not all be zero.")
    return x / x.sum()
