# Copyright © 2015 STRG.AT GmbH, Vienna, Austria
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
This package :ref:`integrates <framework_integration>` the module with
pyramid.

The configured module is made available as ``request.assetgroups`` in views
and as ``assetgroups`` in all renderer globals, so templates can embed groups
like this:

.. code-block:: jinja

    <link rel="stylesheet" href="{{ assetgroups.url('main') }}">
"""

from pyramid.events import BeforeRender
import score.assetgroups


def init(confdict, configurator):
    """
    Initializes the module via the generic :func:`initializer function
    <score.assetgroups.init>` and registers the request property and the
    renderer global described above.
    """
    conf = score.assetgroups.init(confdict)

    def assetgroups(request):
        return conf

    def add_renderer_global(event):
        event['assetgroups'] = conf

    configurator.add_request_method(assetgroups, 'assetgroups', reify=True)
    configurator.add_subscriber(add_renderer_global, BeforeRender)
    return conf
