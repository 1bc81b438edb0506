from setuptools import setup, find_packages
import re

# Read version from iitcalc/__init__.py
with open('iitcalc/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='iit-calc',
    version=version,
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=[
        'PyYAML>=6.0',
        'click>=8.0',
        'pydantic>=2.0.0',
        'rich>=13.0',
    ],
    extras_require={
        'mcp': [
            'mcp[cli]>=1.0.0,<2',
        ],
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'iit-calc=iitcalc.cli.__main__:main',
            'iit-calc-mcp=iitcalc.mcp.server:run_server',
        ],
    },
    author='Personal',
    description='Individual income tax withholding and year-end bonus calculator.',
    python_requires='>=3.10',
)
