# -*- coding: utf-8 -*-
from setuptools import setup, find_packages

long_description = "Lazy, cached and stateful Technical Analysis Series over live OHLCV bars for Python 3"

setup(
    name = "pandas_ta_series",
    packages = find_packages(exclude=["tests", "tests.*", "scripts"]),
    version = "0.1.0",
    description=long_description,
    long_description=long_description,
    url = "https://github.com/glar1900/pandas-ta-series",
    keywords = ['technical analysis', 'python3', 'pandas', 'numba', 'streaming'],
    license="The MIT License (MIT)",
    python_requires=">=3.9",
    classifiers = [
        'Programming Language :: Python :: 3.9',
        'Development Status :: 3 - Alpha',
        'License :: OSI Approved :: MIT License',
        'Natural Language :: English',
        'Intended Audience :: Developers',
        'Intended Audience :: Financial and Insurance Industry',
        'Topic :: Office/Business :: Financial :: Investment',
    ],
    install_requires=['numpy', 'pandas>=2.0', 'numba'],

    # List additional groups of dependencies here (e.g. development dependencies).
    # You can install these using the following syntax, for example:
    # $ pip install -e .[dev,test]
    extras_require = {
        'dev': ['pytest', 'jupyterlab'],
        'test': ['pytest'],
    },
)
