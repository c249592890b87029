from setuptools import setup, find_packages

setup(
    name='hexpix_hit_analysis',
    version='0.1',
    packages=find_packages(include=['hexpix', 'hexpix.*']),
    install_requires=[
        'uproot',
        'numpy',
        'hist',
        'awkward',
        'matplotlib',
        'mplhep'
    ],
    extras_require={
        'test': ['pytest'],
    },
    description='Hit-level analysis for hexagonal pixel sensors',
)
