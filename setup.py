#!/usr/bin/env python3
from __future__ import annotations

import re
import os
import setuptools
import pathlib

__prefix__ = os.getenv('PNGME_PREFIX') or ''
__minver__ = '3.8'
__author__ = 'pngme developers'
__slogan__ = 'Hide messages in the chunks of PNG files.'
__topics__ = [
    'Development Status :: 3 - Alpha',
    'Operating System :: OS Independent',
    'Programming Language :: Python :: 3 :: Only',
    'Topic :: Multimedia :: Graphics',
    'Topic :: Security',
    'Topic :: Utilities',
]

__requirements__ = [
    'colorama>=0.4.6',
]

__extras__ = {
    'test': [
        'pillow',
    ],
    'dev': [
        'flake8',
        'pillow',
    ],
}


def get_version(filename: str | pathlib.Path | None = None) -> str:
    if filename is None:
        filename = pathlib.Path(__file__).parent.joinpath('pngme', '__init__.py')
    with open(filename, 'r', encoding='UTF8') as init:
        match = re.search(R'''^__version__\s*=\s*['"]([^'"]+)['"]''', init.read(), flags=re.MULTILINE)
    if match is None:
        raise RuntimeError('unable to determine the package version')
    return match[1]


def get_config():

    def get_setup_readme(filename: str | pathlib.Path | None = None):
        if filename is None:
            filename = pathlib.Path(__file__).parent.joinpath('README.md')
        try:
            README = open(filename, 'r', encoding='UTF8')
        except FileNotFoundError:
            return __slogan__
        with README:
            return README.read()

    def get_setup_common() -> dict:
        return dict(
            version=get_version(),
            long_description=get_setup_readme(),
            author=__author__,
            description=__slogan__,
            long_description_content_type='text/markdown',
            python_requires=F'>={__minver__}',
            classifiers=__topics__,
        )

    console_scripts = [F'{__prefix__}pngme=pngme.commands:main']
    config = get_setup_common()

    config.update(
        name='pngme',
        packages=setuptools.find_namespace_packages(include=('pngme*',)),
        install_requires=__requirements__,
        extras_require=__extras__,
        include_package_data=True,
        entry_points={'console_scripts': console_scripts},
    )

    return config


if __name__ == '__main__':
    setuptools.setup(**get_config())
