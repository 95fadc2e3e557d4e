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
Reader for OpenFOAM dictionary files (fvSchemes, fvSolution, solverOptions, ...).

Dictionaries are returned as nested Python dicts. A value made of a single token is returned as that token,
a value made of several tokens (e.g. `Gauss linear;`) as a list of the tokens, and a parenthesised list as a list.
Integers and floats are converted, everything else is kept as a string.
"""

from typing import Any, Dict

import pyparsing as pp


def _convert_number(tokens: pp.ParseResults):
    text = tokens[0]
    if any(char in text for char in '.eE'):
        return float(text)
    return int(text)


def _make_entry(tokens: pp.ParseResults):
    key, values = tokens[0], list(tokens[1:])
    if len(values) == 0:
        value = None
    elif len(values) == 1:
        value = values[0]
    else:
        value = values
    return [(key, value)]


def _build_grammar() -> pp.ParserElement:
    LBRACE, RBRACE, LPAR, RPAR, SEMI = map(pp.Suppress, '{}();')

    quoted = pp.QuotedString('"')
    number = pp.Regex(r'[-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?(?=[\s;(){}]|$)')
    number.setParseAction(_convert_number)
    # Function-like words such as grad(U) or div(phi,U) are kept whole, one level of nesting is allowed
    word = pp.Regex(r'[^\s{}();"]+(?:\((?:[^\s{}();"]|\([^\s{}();"]*\))*\))?')
    key  = quoted | pp.Regex(r'[A-Za-z_$][^\s{};"]*')

    value = pp.Forward()
    foam_list = LPAR + pp.ZeroOrMore(value) + RPAR
    foam_list.setParseAction(lambda tokens: [list(tokens)])
    value <<= quoted | number | foam_list | word

    entry = pp.Forward()
    sub_dict = LBRACE + pp.ZeroOrMore(entry) + RBRACE
    sub_dict.setParseAction(lambda tokens: [dict(list(tokens))])

    # e.g. #include "file" or #inputMode merge, which are dropped
    directive = pp.Suppress(pp.Regex(r'#\w+') + pp.Optional(quoted | word))

    regular_entry = key + (sub_dict | pp.ZeroOrMore(value) + SEMI)
    regular_entry.setParseAction(_make_entry)
    entry <<= directive | regular_entry

    document = pp.ZeroOrMore(entry) + pp.StringEnd()
    document.ignore(pp.cppStyleComment)
    return document


_GRAMMAR = _build_grammar()


def parse_foam_dictionary(text: str) -> Dict[str, Any]:
    """
    Parse the contents of an OpenFOAM dictionary.

    Parameters
    ----------
    * text: The contents of the file.

    Returns
    -------
    * foam_dict: Nested dictionary of the entries, the `FoamFile` header included.
    """
    return dict(list(_GRAMMAR.parseString(text, parseAll=True)))


def read_foam_dictionary(file_path: str) -> Dict[str, Any]:
    """
    Read an OpenFOAM dictionary from file.

    Parameters
    ----------
    * file_path: The path to the dictionary file.

    Returns
    -------
    * foam_dict: Nested dictionary of the entries, see `parse_foam_dictionary`.
    """
    with open(file_path, 'r') as file:
        content = file.read()
    return parse_foam_dictionary(content)


def batch_reactor_options(foam_dict: Dict[str, Any]) -> Dict[str, Dict[str, str]]:
    """
    Extract the batch reactor settings from a solverOptions dictionary and express them as config file entries.

    Recognized entries:

        Kinetics
        {
            mechanism   "h2o2.yaml";
            phase       ohmech;
        }

        BatchReactor
        {
            temperature     1000;
            pressure        101325;
            moleFractions   (H2 2 O2 1 N2 3.76);    // or a sub-dictionary { H2 2; O2 1; N2 3.76; }
            endTime         1e-3;
            maxIterations   10;
        }

    Parameters
    ----------
    * foam_dict: The parsed dictionary, as returned by `read_foam_dictionary`.

    Returns
    -------
    * options: Mapping of config section -> key -> value (as a string) for every entry that was found.
    """
    options: Dict[str, Dict[str, str]] = {'CHEMISTRY': {}, 'REACTOR': {}, 'SIMULATION': {}}

    kinetics = foam_dict.get('Kinetics', {})
    for foam_key, config_key in [('mechanism', 'mechanism'), ('phase', 'phase')]:
        if foam_key in kinetics:
            options['CHEMISTRY'][config_key] = str(kinetics[foam_key])

    reactor = foam_dict.get('BatchReactor', {})
    for foam_key, config_key in [('temperature', 'temperature'), ('pressure', 'pressure'), ('maxIterations', 'max_iterations')]:
        if foam_key in reactor:
            options['REACTOR'][config_key] = str(reactor[foam_key])

    if 'moleFractions' in reactor:
        mole_fractions = reactor['moleFractions']
        if isinstance(mole_fractions, list):
            if len(mole_fractions) % 2 != 0:
                raise ValueError("moleFractions must be a list of (name value) pairs.")
            mole_fractions = dict(zip(mole_fractions[0::2], mole_fractions[1::2]))
        elif not isinstance(mole_fractions, dict):
            raise ValueError("moleFractions must be a list or a dictionary.")
        options['REACTOR']['mole_fractions'] = str({str(name): float(x) for name, x in mole_fractions.items()})

    if 'endTime' in reactor:
        options['SIMULATION']['t_span'] = f"0.0, {float(reactor['endTime'])}"

    return options
