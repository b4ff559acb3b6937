from setuptools import setup, find_packages

__version__ = '0.1.0'

requirements = [
    'pymongo>=4.0',
    'iso8601',
    'coloredlogs',
    'sanic>=22.9',
    'sanic-cors',
]

test_requirements = [
    'pytest',
    'sanic-testing',
]

setup(
    name='ballotbox',
    version=__version__,
    description='Owner-administered ballot registry with a one-vote-per-voter tally.',
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=requirements,
    extras_require={
        'test': test_requirements,
    },
    classifiers=[
        'Programming Language :: Python :: 3',
    ],
    zip_safe=True,
    include_package_data=True,
)
