# -*- coding: utf-8 -*-
# cppmetrics is a suite of metrics for measuring C preprocessor-based
# variability in software product lines.
# Copyright (C) 2014-2015 University of Passau, Germany
#
# This program is free software: you can redistribute it and/or modify it
# under the terms of the GNU Lesser General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
# Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public
# License along with this program.  If not, see
# <http://www.gnu.org/licenses/>.
#
# Contributors:
#     Claus Hunsen <hunsen@fim.uni-passau.de>
#     Andreas Ringlstetter <andreas.ringlstetter@gmail.com>


# #################################################
# imports from the std-library

import os

# #################################################
# imports from subfolders

from cppmetrics.codemodel import IfdefEndifMismatchError, readSrcML, readVariabilityModel, returnFileNames
from cppmetrics.analyses import scatteringdegree

# #################################################
# external modules

# python-lxml module
from lxml import etree


##################################################
# constants for the option '--filenames'

FILENAME_SRCML = 0
FILENAME_SOURCE = 1


##################################################
# input

def readSourceFiles(folder):
    """This function reads all srcML files of the folder and its
    subfolders. Files that cannot be parsed are skipped."""
    sourcefiles = []
    files = returnFileNames(folder, ['.xml'])
    ftotal = len(files)

    for fcount, file in enumerate(files, start=1):
        try:
            sourcefiles.append(readSrcML(file))
        except etree.XMLSyntaxError:
            print("ERROR: cannot parse (%s). Skipping this file." % file)
            continue
        except IfdefEndifMismatchError as e:
            print("ERROR: ifdef-endif mismatch in file (%s): %s" % (file, e))
            continue

        print('INFO: parsing file (%5d) of (%5d) -- (%s).' % (fcount, ftotal, file))

    return sourcefiles


def getFileNameFunction(folder, options):
    '''Returns a function that gives the name of a source file to print,
    according to the options --filenames and --filenamesRelative.'''
    filenames = getattr(options, 'filenames', FILENAME_SRCML)
    relative = getattr(options, 'filenamesRelative', False)

    def _getFileName(sourcefile):
        if filenames == FILENAME_SOURCE:
            name = sourcefile.sourcePath
            if relative and os.path.isabs(name):
                name = os.path.relpath(name, os.path.join(folder, os.pardir))
        else:
            name = sourcefile.path
            if relative:
                name = os.path.relpath(name, folder)
        return name

    return _getFileName


def getVariabilityModel(options):
    path = getattr(options, 'varmodel', None)
    if not path:
        return None
    return readVariabilityModel(path)


def getScatteringDegrees(sourcefiles, varModel, options):
    """This function returns the scattering degrees of all variables. If
    a cache file is given and exists, it is read; otherwise the degrees
    are counted and written to the cache file, if given."""
    cachefile = getattr(options, 'sdcache', None)

    if cachefile and os.path.isfile(cachefile):
        print("INFO: reading scattering degrees from cache (%s)." % cachefile)
        return scatteringdegree.readScatteringDegrees(cachefile, varModel)

    counter = scatteringdegree.VariabilityCounter(getattr(options, 'threads', 1))
    container = counter.count(sourcefiles, varModel)

    if cachefile:
        print("INFO: writing scattering degrees to cache (%s)." % cachefile)
        scatteringdegree.writeScatteringDegrees(cachefile, container)
    return container


def getOutputFile(folder, resultsfile):
    '''Results are written next to the srcML folder.'''
    return os.path.normpath(os.path.join(folder, os.pardir, resultsfile))
