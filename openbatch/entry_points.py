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
OpenBatch has two entry points:
1. `openbatch` for setting up and running the batch reactor simulation, invoked as `openbatch CONFIG_FILE_PATH`.
2. `openbatch-tests` for running the provided pytests, invoked as `openbatch-tests`.
"""

import os
import subprocess
import sys
from pathlib import Path

from .run import run


def run_openbatch():
    """
    Function for running OpenBatch using entry points.
    Invoked as `openbatch CONFIG_FILE_PATH`.

    Parameters (from command line)
    ----------
    * config_file_path: Filename of the config file to load. Required parameter.
    """
    if len(sys.argv) == 1:
        print("ERROR: Provide configuration file path. "
              "Usage: openbatch CONFIG_FILE_PATH")
        sys.exit(1)
    elif len(sys.argv) == 2:
        timing_dict = run(sys.argv[1])
        for step, duration in timing_dict.items():
            print(f"{step}: {duration / 1e9:.3f} s")
    else:
        print("ERROR: More than one argument was provided. "
              "Usage: openbatch CONFIG_FILE_PATH")
        sys.exit(1)


def run_tests():
    """
    Main function for running all unit tests.
    Should only be used for the `openbatch-tests` entry-point.
    """
    print("Starting unit tests, this should take a few seconds.")

    pyinterp = sys.executable
    tests_dir = os.path.join(Path(__file__).parents[0], 'tests')

    # automatically find and run all unit tests using pytest's discovery
    sys.exit(subprocess.call([pyinterp, '-B', '-m', 'pytest', '-v'], cwd=tests_dir))
