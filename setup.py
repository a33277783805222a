from setuptools import setup, find_packages

__version__ = '0.1.0'

requirements = [
    'coloredlogs>=15.0',
    'iso8601>=1.0.2',
]

test_requirements = [
    'pytest>=7.0',
]

setup(
    name='simple-nft',
    version=__version__,
    description='Non-fungible token ledger with minting, transfers and expiring approvals over a pluggable key-value store.',
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=requirements,
    extras_require={
        'test': test_requirements,
    },
    python_requires='>=3.8',
    classifiers=[
        'Programming Language :: Python :: 3',
    ],
    zip_safe=True,
    include_package_data=True,
)
