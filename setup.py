#!/usr/bin/env python3

import os
from setuptools import setup, find_packages

def find_package_data(package_dir, data_subdir):
    search_dir = os.path.join(package_dir, data_subdir)
    paths = []
    for (path, directories, filenames) in os.walk(search_dir):
        for fname in filenames:
            fpath = os.path.join(path, fname)
            rel_fpath = fpath[len(package_dir)+1:]
            paths.append(rel_fpath)
    return paths

alpsemu_data = find_package_data('alpsemu', 'data')

alpsemu_long_description = \
"ALPS emulator: a stand-in for the inventory and reservation service of "   \
"Cray systems, producing a deterministic synthetic topology for a node "    \
"table so that schedulers can be tested without the real service."

setup(name='alps-emulator',
      version='0.1.0',
      description='ALPS inventory and reservation emulator',
      long_description=alpsemu_long_description,
      packages=find_packages(include=['alpsemu', 'alpsemu.*']),
      package_data={'alpsemu': alpsemu_data},
      scripts=['bin/alpsemu'],
      python_requires='>=3.6',
      extras_require={'test': ['pytest']},
      )
