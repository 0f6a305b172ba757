# Copyright © 2015-2018 STRG.AT GmbH, Vienna, Austria
#
# This file is part of the The SCORE Framework.
#
# The SCORE Framework and all its parts are free software: you can redistribute
# them and/or modify them under the terms of the GNU Lesser General Public
# License version 3 as published by the Free Software Foundation which is in the
# file named COPYING.LESSER.txt.
#
# The SCORE Framework and all its parts are distributed without any WARRANTY;
# without even the implied warranty of MERCHANTABILITY or FITNESS FOR A
# PARTICULAR PURPOSE. For more details see the GNU Lesser General Public
# License.
#
# If you have not received a copy of the GNU Lesser General Public License see
# http://www.gnu.org/licenses/.
#
# The License-Agreement realised between you as Licensee and STRG.AT GmbH as
# Licenser including the issue of its valid conclusion and its pre- and
# post-contractual effects is governed by the laws of Austria. Any disputes
# concerning this License-Agreement including the issue of its valid conclusion
# and its pre- and post-contractual effects are exclusively decided by the
# competent court, in whose district STRG.AT GmbH has its registered seat, at
# the discretion of STRG.AT GmbH also the competent court, in whose district the
# Licensee has his registered seat, an establishment or assets.


"""
Filters transform the content of assets before they are merged into the
output file of an :term:`asset group`. Filters are configured once, under a
name, and referenced by that name in the group definitions.
"""

import abc
import logging

from score.init import parse_dotted_path


log = logging.getLogger(__name__)


class Filter(abc.ABC):
    """
    Base class for all filters.
    """

    @abc.abstractmethod
    def filter(self, content, asset):
        """
        Returns the transformed *content* of given *asset*.
        """


def create_filter(spec):
    """
    Creates a :class:`Filter` from a configured *spec*, which may be

    - a :class:`Filter` instance, which will be used as-is,
    - a dotted path to a class (like ``myapp.filters.CssMinifier``), which
      will be imported and instantiated without arguments, or
    - any other callable, which will be invoked without arguments and must
      return a :class:`Filter`.
    """
    from ._init import UnknownFilterSpecError
    if isinstance(spec, Filter):
        return spec
    if isinstance(spec, str):
        try:
            spec = parse_dotted_path(spec)
        except Exception as e:
            raise UnknownFilterSpecError(spec) from e
    if not callable(spec):
        raise UnknownFilterSpecError(spec)
    result = spec()
    if not isinstance(result, Filter):
        raise UnknownFilterSpecError(
            spec, '%r did not produce a filter' % (spec,))
    return result


def build_filter_registry(specs):
    """
    Converts a `dict` mapping names to filter specs into a `dict` mapping the
    same names to :class:`Filter` instances.
    """
    registry = {}
    for name, spec in specs.items():
        registry[name] = create_filter(spec)
        log.debug('Registered filter %s: %r', name, registry[name])
    return registry
