# -*- coding: utf-8 -*-
# cppmetrics is a suite of metrics for measuring C preprocessor-based
# variability in software product lines.
# Copyright (C) 2015 University of Passau, Germany
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


from setuptools import setup, find_packages

setup(
    name='cppmetrics',
    version="0.1.0",
    packages=find_packages(exclude=['tests', 'tests.*']),
    py_modules=['cppmetrics_compare'],
    license='LGPLv3',
    description='variability-aware metrics for preprocessor-based software product lines',
    python_requires='>=3.6',

    install_requires=[
        'pyparsing>=3.0',
        'lxml>=3.4',
        'numpy',
        'click',
        'colorama'
    ],

    extras_require={
        'test': ['pytest']
    },

    entry_points={'console_scripts': [
        'cppmetrics = cppmetrics.cppmetrics:main',
        'cppmetrics.compare = cppmetrics_compare:main'
    ]}
)
