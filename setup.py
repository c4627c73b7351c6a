import codecs
from setuptools import setup, find_packages
import os

classifiers = """\
Development Status :: 4 - Beta
Environment :: Console
Intended Audience :: Developers
License :: OSI Approved :: MIT License
Operating System :: OS Independent
Programming Language :: Python
Programming Language :: Python :: 3
Topic :: Software Development :: Libraries :: Python Modules
Topic :: System :: Software Distribution
"""

version = '0.1'

HERE = os.path.abspath(os.path.dirname(__file__))

def read(*parts):
    """
    Build an absolute path from *parts* and return the contents of the
    resulting file.  Assume UTF-8 encoding.
    """
    with codecs.open(os.path.join(HERE, *parts), "rb", "utf-8") as f:
        return f.read()

setup(
        name='release-finder',
        version=version,
        description="Find the latest GitHub releases of a repository and download their assets",
        packages=find_packages(include=['release_finder', 'release_finder.*']),
        long_description=read("README.md"),
        long_description_content_type='text/markdown',
        classifiers=list(filter(None, classifiers.split("\n"))),
        keywords='github releases assets download',
        license='MIT',
        include_package_data=True,
        zip_safe=True,
        python_requires='>=3.7',
        install_requires=[
            'requests'
        ],
        extras_require={
            'test': ['pytest'],
        },
        entry_points={
            'console_scripts': [
                'gh-releases=release_finder.cli_releases:main',
            ],
        },
)
