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

import pytest

from openbatch.chemistry.mass_action import Arrhenius

from . import reactor_helpers


@pytest.fixture
def isomerization():
    """A -> B with a rate constant of 5 1/s at every temperature."""
    return reactor_helpers.isomerization()


@pytest.fixture
def activated_isomerization():
    """A -> B with a temperature dependent rate constant."""
    return reactor_helpers.isomerization(Arrhenius(A=1e7, b=0.5, Ea=1.2e8))


@pytest.fixture
def recombination():
    return reactor_helpers.recombination()
