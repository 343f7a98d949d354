# /setup.py
"""
Setup configuration for projectinfo.
"""
from setuptools import setup, find_namespace_packages
from pathlib import Path

# Read version from projectinfo/__init__.py
with open('projectinfo/__init__.py', 'r') as f:
    for line in f:
        if line.startswith('__version__'):
            version = line.split('=')[1].strip().strip('"\'')
            break

# Read README
readme = Path(__file__).parent / 'README.md'
long_description = readme.read_text() if readme.exists() else ''

setup(
    name='projectinfo',
    version=version,
    description='Resolve docker-compose container aliases to container IP addresses',
    long_description=long_description,
    long_description_content_type='text/markdown',
    packages=find_namespace_packages(include=['projectinfo', 'projectinfo.*']),
    python_requires='>=3.8',
    install_requires=[
        'click>=8.1.7',
        'rich>=13.7.0',
        'pyyaml>=6.0.1',
        'python-dotenv>=1.0.0'
    ],
    extras_require={
        'test': [
            'pytest>=7.4.0',
        ]
    },
    entry_points={
        'console_scripts': [
            'projectinfo=projectinfo.projectinfo:cli'
        ]
    },
    classifiers=[
        'Development Status :: 5 - Production/Stable',
        'Environment :: Console',
        'Intended Audience :: Developers',
        'Operating System :: POSIX :: Linux',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Topic :: Software Development :: Testing',
        'Topic :: System :: Networking',
    ],
    keywords='docker, docker-compose, containers, proxy, testing',
    zip_safe=False,
)
