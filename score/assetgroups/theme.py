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


import os


class Theme:
    """
    The active theme. Its *name* selects the sub-folder of *rootdir*
    containing the asset sources, while *assetsdir* is the folder below the
    public web root receiving the generated files. The string ``{theme}``
    inside *assetsdir* is replaced with the theme's name.
    """

    def __init__(self, name, rootdir, assetsdir):
        self.name = name
        self.rootdir = rootdir
        self.assetsdir = assetsdir.replace('{theme}', name).strip('/')

    def theme_path(self, relative):
        """
        Returns the path of a source file of this theme.
        """
        return os.path.join(self.rootdir, self.name, relative)

    def assets_path(self, relative):
        """
        Returns the path of a public asset relative to the public folder.
        """
        if not self.assetsdir:
            return relative.lstrip('/')
        return '%s/%s' % (self.assetsdir, relative.lstrip('/'))
