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
This file contains that modified ConfigParser along with any relevent helper functions.
"""

import configparser
import ast
from os.path import isfile
from pathlib import Path
from typing import Dict, List, Type, TypeVar

from ..io import batch_reactor_options, read_foam_dictionary


T = TypeVar('T', bool, str, int, float)
"""Used only for type hints."""

config_defaults: Dict = {
    'SETUP': {'working_directory': './',
              'output_folder_path': 'output_batch/'},
    'CHEMISTRY': {'phase': 'None'},
    'REACTOR': {'max_iterations': 10},
    'SIMULATION': {'run': True,
                   'first_timestep': 1e-8,
                   'solver': 'BDF',
                   'rtol': 1e-6,
                   'atol': 1e-12,
                   't_eval': 'all',
                   'use_jacobian': True},
    'POST-PROCESSING': {'save_to_file': True,
                        'plot_results': False,
                        'calculate_ignition_delay': True,
                        'ignition_temperature_rise': 'None'},
}
"""
Default values for the various options available in OpenBatch.
If a default is used, OpenBatch outputs a message in the terminal.
"""

required_options: Dict = {
    'CHEMISTRY': ['mechanism'],
    'REACTOR': ['temperature', 'pressure', 'mole_fractions'],
    'SIMULATION': ['t_span'],
}
"""Options which have no default and must be given either in the config file or in the OpenFOAM solver options."""

valid_solvers = ('BDF', 'LSODA', 'Radau', 'RK45', 'RK23', 'DOP853')
"""The solve_ivp methods which can be selected."""


class ConfigParser(configparser.ConfigParser):
    """
    OpenBatch's modified ConfigParser extended to have several useful functions added to it.
    """

    def __init__(self, config_file_path: str) -> None:
        """
        Only initializer to use.

        Parameters
        ----------
        config_file_path: The path to the config file to load, relative to run directory.
        """
        super().__init__()

        self.need_to_update_paths = True
        """
        Boolean indicating whether the paths need to be updated.
        Path are updated with `update_paths` which can be called manually or will be called automatically
        at the top of `openbatch.run.run`.
        """

        if not isfile(config_file_path):
            raise FileNotFoundError('The given config file \"{}\" does not exist.'.format(config_file_path))

        self.read(config_file_path)

        # Entries from an OpenFOAM solverOptions dictionary only fill in what the config file does not specify
        solver_options_path = self.get('INPUT', 'solver_options_path', fallback=None)
        if solver_options_path is not None:
            working_directory = self.get('SETUP', 'working_directory', fallback=config_defaults['SETUP']['working_directory'])
            solver_options_path = working_directory + solver_options_path
            if not isfile(solver_options_path):
                raise FileNotFoundError('The given solver options file \"{}\" does not exist.'.format(solver_options_path))
            self.merge_options(batch_reactor_options(read_foam_dictionary(solver_options_path)))

        # Load defaults for any default-able values that were not specified
        for key, sub_dict in config_defaults.items():
            if key not in self:
                self.add_section(key)
            for key_sub, val_sub in sub_dict.items():
                if key_sub not in self[key]:
                    print(f'Using the default value of {val_sub} for {key}, {key_sub}.')
                    self[key][key_sub] = str(val_sub)

        for key, sub_keys in required_options.items():
            for key_sub in sub_keys:
                if key_sub not in self[key]:
                    raise ValueError(f"Need to specify a value for {key}, {key_sub}")

        # Validate solver choice
        solver = self.get_item(['SIMULATION', 'solver'], str)
        if solver not in valid_solvers:
            raise ValueError(f"Invalid solver ({solver}) specified, must be one of {', '.join(valid_solvers)}.")

        if self.get_item(['REACTOR', 'max_iterations'], int) < 1:
            raise ValueError("REACTOR, max_iterations must be at least 1.")

        # Validate mole fractions
        mole_fractions = self.get_expression(['REACTOR', 'mole_fractions'])
        if not isinstance(mole_fractions, dict) or len(mole_fractions) < 1:
            raise ValueError('REACTOR, mole_fractions must be a dictionary with at least 1 species, e.g. {"H2": 2, "O2": 1}.')
        if any(x < 0 for x in mole_fractions.values()) or sum(mole_fractions.values()) <= 0:
            raise ValueError('REACTOR, mole_fractions must be non-negative and not all zero.')

    def merge_options(self, options: Dict[str, Dict[str, str]]) -> None:
        """
        Add options to the parser without overwriting any which are already set.

        Parameters
        ----------
        * options: Mapping of section -> key -> value.
        """
        for section, entries in options.items():
            if section not in self:
                self.add_section(section)
            for key, value in entries.items():
                if key not in self[section]:
                    self[section][key] = value

    def update_paths(self) -> None:
        """
        OpenBatch is run from a given directory (folder). This folder is referred to as the running directory.

        This running directory may not be the same as the directory in which all the files are stored.
        The config file specifies a path to the "working directory" (default is the running directory) which
        is the directory in which to look for inputs and where to place outputs.

        All paths in the OpenBatch config file are given as relative to that directory.
        This method converts those paths to be relative to the running directory.
        """
        working_directory = self['SETUP']['working_directory']

        self['SETUP']['output_folder_path'] = working_directory + self['SETUP']['output_folder_path']

        # Mechanisms shipped with Cantera are given by name only and are found through Cantera's data path
        mechanism = self.get_item(['CHEMISTRY', 'mechanism'], str)
        if isfile(working_directory + mechanism):
            self['CHEMISTRY']['mechanism'] = working_directory + mechanism

        # Ensure output folders exist, create them if they don't
        Path(self['SETUP']['output_folder_path']).mkdir(parents=True, exist_ok=True)

        self.need_to_update_paths = False

    def get_list(self, config_keys: List[str], val_type: Type[T]) -> List[T]:
        """
        Function to load a list of parameters from the config file.

        Parameters
        ----------
        * config_keys:  The keys needed to access the parameters from the config file.
        * val_type:     The type that each parameter is supposed to be, and to which it will be converted.

        Returns
        -------
        * List of the parameters from the config file, converted to the specified type.
        """
        section, key = config_keys
        try:
            params_tmp = self[section][key].split(', ')
        except KeyError:
            raise ValueError(f"Need to specify a value for {section}, {key}")

        ret_list = []
        for param in params_tmp:
            if val_type == bool:
                ret_list.append(param == 'True')
            else:
                ret_list.append(val_type(param))

        return ret_list

    def get_item(self, config_keys: List[str], val_type: Type[T]) -> T:
        """
        Function to load a parameter from the config file.

        Parameters
        ----------
        * config_keys:  The keys needed to access the parameters from the config file.
        * val_type:     The type that the parameter is supposed to be, and to which it will be converted.

        Returns
        -------
        * The parameter from the config file converted to the specified type.
        """
        section, key = config_keys
        try:
            param = self[section][key]
        except KeyError:
            raise ValueError(f"Need to specify a value for {section}, {key}")

        if val_type == bool:
            return param.lower() == 'true'
        else:
            return val_type(param)

    def get_expression(self, config_keys: List[str]):
        """
        Function to load and evaluate a Python expression from the config file.

        Parameters
        ----------
        * config_keys: The keys needed to access the expression from the config file.

        Returns
        -------
        *   The evaluated result of the Python expression as a single value of the specified type,
            or a list/tuple of the specified type.
        """
        section, key = config_keys
        return ast.literal_eval(self[section][key])
