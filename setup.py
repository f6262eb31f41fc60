#!/usr/bin/env python

from setuptools import setup
import glob

from splitaln_utilities.utilities import get_splitaln_version

with open("README.md", "r") as fh:
    long_description = fh.read()

scripts = glob.glob("splitaln*.py")

version = get_splitaln_version()[1:]

setup(
    name='SplitAln',
    version=version,
    author='Michael Alonge',
    author_email='malonge11@gmail.com',
    description='Split spliced SAM/BAM alignments into their aligned blocks',
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=['splitaln_utilities'],
    package_dir={'splitaln_utilities': 'splitaln_utilities/'},
    license="MIT",
    classifiers=[
            "Programming Language :: Python :: 3",
            "License :: OSI Approved :: MIT License",
    ],
    install_requires=[
              'pysam',
          ],
    extras_require={
        'test': ['pytest'],
    },
    python_requires='>=3.6',
    scripts=scripts,
    zip_safe=True
)
