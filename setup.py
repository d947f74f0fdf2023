#!/usr/bin/env python3
"""Setup script for AFS Monitor"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README
readme_file = Path(__file__).parent / 'README.md'
long_description = readme_file.read_text() if readme_file.exists() else ''

# Read requirements
requirements_file = Path(__file__).parent / 'requirements.txt'
requirements = []
if requirements_file.exists():
    requirements = [
        line.strip()
        for line in requirements_file.read_text().splitlines()
        if line.strip() and not line.startswith('#')
    ]

setup(
    name='afs-monitor',
    version='1.0.0',
    description='Monitoring-plugin health checks for AFS fileservers and database servers',
    long_description=long_description,
    long_description_content_type='text/markdown',
    license='GPL-3.0',
    packages=find_packages(where='src'),
    package_dir={'': 'src'},
    install_requires=requirements,
    extras_require={
        'test': ['pytest>=7.0'],
    },
    python_requires='>=3.8',
    entry_points={
        'console_scripts': [
            'afs-monitor=afs_monitor.cli.main:main',
            'check_rxdebug=afs_monitor.cli.main:check_rxdebug',
            'check_afs_space=afs_monitor.cli.main:check_afs_space',
            'check_bos=afs_monitor.cli.main:check_bos',
            'check_udebug=afs_monitor.cli.main:check_udebug',
            'check_vldb_registration=afs_monitor.cli.main:check_vldb_registration',
        ],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: System Administrators',
        'License :: OSI Approved :: GNU General Public License v3 (GPLv3)',
        'Operating System :: POSIX :: Linux',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Topic :: System :: Monitoring',
        'Topic :: System :: Filesystems',
        'Topic :: System :: Systems Administration',
    ],
    keywords='afs openafs nagios icinga monitoring plugin',
    include_package_data=True,
    zip_safe=False,
)
