#!/usr/bin/env python3
from __future__ import annotations

import setuptools
import pathlib
import sys
import toml

__minver__ = '3.8'
__author__ = 'vpkdir contributors'
__slogan__ = 'A streaming reader for the directory tree of Valve Pak (VPK) files.'
__topics__ = [
    'Development Status :: 3 - Alpha',
    'Operating System :: OS Independent',
    'Programming Language :: Python :: 3 :: Only',
    'Topic :: Games/Entertainment',
    'Topic :: System :: Archiving',
]


def get_config():
    here = pathlib.Path(__file__).parent.absolute()
    sys.path.insert(0, str(here))

    import vpkdir

    def get_setup_readme(filename: str | pathlib.Path | None = None):
        if filename is None:
            filename = here.joinpath('README.md')
        with open(filename, 'r', encoding='UTF8') as README:
            return README.read()

    ppcfg: dict[str, dict] = toml.load(str(here.joinpath('pyproject.toml')))
    requirements = list(ppcfg['tool']['vpkdir']['dependencies'])
    extras = dict(ppcfg['tool']['vpkdir']['optional-dependencies'])

    return dict(
        name=vpkdir.__distribution__,
        version=vpkdir.__version__,
        long_description=get_setup_readme(),
        author=__author__,
        description=__slogan__,
        long_description_content_type='text/markdown',
        python_requires=F'>={__minver__}',
        classifiers=__topics__,
        packages=setuptools.find_packages(include=('vpkdir*',)),
        install_requires=requirements,
        extras_require=extras,
    )


if __name__ == '__main__':
    setuptools.setup(**get_config())
