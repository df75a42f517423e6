#!/usr/bin/env python
# -*- coding: utf-8 -*-

from setuptools import setup
setup(name='llcc',
    version='0.1',
    description='LL(1) parser construction kit with a finite automaton engine for tokenizers',
    install_requires=['Jinja2>=2.7.0'],
    extras_require={
        'test': ['pytest'],
        },
    packages=['llcc', 'llcc.tests'],
    package_dir={'': 'src'},
    license = "Boost",
    entry_points = {
        'console_scripts': [
            'llcc = llcc.__main__:_main',
            ],
        },
    test_suite = "llcc.tests",
    python_requires='>=3.6',
    classifiers=[
        # Supported python versions
        'Programming Language :: Python :: 3',

        # License
        'License :: OSI Approved :: Boost Software License 1.0 (BSL-1.0)',

        # Topics
        'Topic :: Software Development :: Compilers',
        'Topic :: Software Development :: Libraries',
    ]
    )
