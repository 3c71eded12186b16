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
import shutil  # for copying files and folders
import tempfile  # for temporary files
from abc import ABCMeta, abstractmethod  # abstract classes
from collections import OrderedDict  # for ordered dictionaries

# #################################################
# imports from subfolders

# import different kinds of analyses
from cppmetrics.analyses import scattering, functions, files, variables


# #################################################
# global constants

# folder of a project holding its srcML files
__srcml_folder = "_cppmetrics"


def getSrcMLFolder():
    return __srcml_folder


# #################################################
# abstract analysis thread

class AbstractAnalysisThread(metaclass=ABCMeta):
    '''This class analyzes a whole project according to the given kind of analysis.'''

    def __init__(self, options, inputfolder=None, inputfile=None):
        self.options = options
        self.notrunnable = False

        if (inputfolder):
            self.file = None
            self.folder = os.path.join(inputfolder, getSrcMLFolder())
            self.project = os.path.basename(os.path.normpath(inputfolder))

        elif (inputfile):
            self.file = inputfile
            self.outfile = self.options.outfile
            self.project = os.path.basename(self.file)

            # get full path of temp folder for the single file
            tmpfolder = tempfile.mkdtemp(suffix=getSrcMLFolder())
            self.tmpfolder = tmpfolder
            self.folder = os.path.join(tmpfolder, getSrcMLFolder())
            os.makedirs(self.folder)  # create the folder actually

            self.resultsfile = os.path.join(self.tmpfolder, self.getResultsFile())

        else:
            self.notrunnable = True


    def startup(self):
        # LOGGING
        print("# starting '" + self.getName() + "' analysis: " + self.project)

    def teardown(self):

        # delete temp folder for file-based analysis
        if (self.file):
            shutil.rmtree(self.tmpfolder)

        # LOGGING
        print("# finished '" + self.getName() + "' analysis: " + self.project)

    def run(self):

        if (self.notrunnable):
            print("ERROR: No single file or input list of projects given!")
            return

        self.startup()

        try:
            # copy srcml inputfile to tmp folder and analyze it there
            if (self.file):
                currentFile = os.path.join(self.folder, self.project)
                if (not currentFile.endswith(".xml")):
                    currentFile += ".xml"
                shutil.copyfile(self.file, currentFile)

            # for all srcML files in self.folder
            self.analyze(self.folder)

            # copy main results file from tmp folder to destination
            if (self.file and self.resultsfile != self.outfile):
                shutil.copyfile(self.resultsfile, self.outfile)
        finally:
            self.teardown()

    @classmethod
    @abstractmethod
    def getName(cls):
        pass

    @classmethod
    @abstractmethod
    def getResultsFile(cls):
        pass

    @classmethod
    @abstractmethod
    def addCommandLineOptions(cls, optionParser):
        pass

    @abstractmethod
    def analyze(self, folder):
        pass


# #################################################
# analysis-thread implementations

class ScatteringAnalysisThread(AbstractAnalysisThread):
    @classmethod
    def getName(cls):
        return "scattering"

    @classmethod
    def getResultsFile(cls):
        return scattering.getResultsFile()

    @classmethod
    def addCommandLineOptions(cls, optionParser):
        title = "Options for analysis '" + cls.getName() + "'"
        group = optionParser.add_argument_group(title.upper())
        scattering.addCommandLineOptions(group)

    def analyze(self, folder):
        scattering.apply(folder, self.options)


class FunctionsAnalysisThread(AbstractAnalysisThread):
    @classmethod
    def getName(cls):
        return "functions"

    @classmethod
    def getResultsFile(cls):
        return functions.getResultsFile()

    @classmethod
    def addCommandLineOptions(cls, optionParser):
        title = "Options for analysis '" + cls.getName() + "'"
        group = optionParser.add_argument_group(title.upper())
        functions.addCommandLineOptions(group)

    def analyze(self, folder):
        functions.apply(folder, self.options)


class VariablesAnalysisThread(AbstractAnalysisThread):
    @classmethod
    def getName(cls):
        return "variables"

    @classmethod
    def getResultsFile(cls):
        return variables.getResultsFile()

    @classmethod
    def addCommandLineOptions(cls, optionParser):
        title = "Options for analysis '" + cls.getName() + "'"
        group = optionParser.add_argument_group(title.upper())
        variables.addCommandLineOptions(group)

    def analyze(self, folder):
        variables.apply(folder, self.options)


class FilesAnalysisThread(AbstractAnalysisThread):
    @classmethod
    def getName(cls):
        return "files"

    @classmethod
    def getResultsFile(cls):
        return files.getResultsFile()

    @classmethod
    def addCommandLineOptions(cls, optionParser):
        title = "Options for analysis '" + cls.getName() + "'"
        group = optionParser.add_argument_group(title.upper())
        files.addCommandLineOptions(group)

    def analyze(self, folder):
        files.apply(folder, self.options)


# #################################################
# collection of analysis threads

# add all subclass of AbstractAnalysisThread as available analysis kinds
__analysiskinds = []
for cls in AbstractAnalysisThread.__subclasses__():
    entry = (cls.getName(), cls)
    __analysiskinds.append(entry)

__analysiskinds = OrderedDict(__analysiskinds)


def getKinds():
    return __analysiskinds


# #################################################
# application

def applyFile(kind, inputfile, options):
    kinds = getKinds()

    # get proper analysis thread and call it
    threadClass = kinds[kind]
    thread = threadClass(options, inputfile=inputfile)
    thread.run()


def getFoldersFromInputListFile(inputlist):
    ''' This method reads the given inputfile line-wise and returns the read lines without line breaks.'''

    with open(inputlist, 'r') as file:
        folders = file.read().splitlines()  # read lines from file without line breaks

    folders = [f for f in folders if f.strip() and not f.startswith("#")]  # remove commented lines
    for folder in folders:
        if not os.path.isdir(folder):
            print("WARNING: skipping '{}', it is not a folder!".format(folder))
    folders = [os.path.normpath(f) for f in folders if os.path.isdir(f)]  # normalize paths for easier transformations

    return folders


def applyFolders(kind, inputlist, options):
    kinds = getKinds()

    # get the list of projects/folders to process
    folders = getFoldersFromInputListFile(inputlist)

    # for each folder:
    for folder in folders:
        # get proper analysis thread and call it
        threadClass = kinds[kind]
        thread = threadClass(options, inputfolder=folder)
        thread.run()


def applyFoldersAll(inputlist, options):
    kinds = getKinds()
    for kind in kinds.keys():
        applyFolders(kind, inputlist, options)
