"""A declarative command-line argument binder: options, positional
slots of fixed or unbounded arity, and one level of subcommands, bound
into values you own.
"""

from setuptools import setup


__author__ = 'The bindery developers'
__version__ = '0.1.0'
__license__ = 'BSD'


setup(name='bindery',
      version=__version__,
      description="A command-line argument binder. Declare options and positional slots, get typed values back.",
      long_description=__doc__,
      author=__author__,
      packages=['bindery', 'bindery.test'],
      include_package_data=True,
      zip_safe=False,
      license=__license__,
      platforms='any',
      install_requires=['boltons>=20.0.0'],
      extras_require={'test': ['pytest>=6.0']},
      classifiers=[
          'Topic :: Utilities',
          'Intended Audience :: Developers',
          'Topic :: Software Development :: Libraries',
          'Programming Language :: Python :: 3.8',
          'Programming Language :: Python :: 3.9',
          'Programming Language :: Python :: 3.10',
          'Programming Language :: Python :: 3.11',
          'Programming Language :: Python :: 3.12',
          'Programming Language :: Python :: 3 :: Only',
          'Programming Language :: Python :: Implementation :: CPython',
          'Programming Language :: Python :: Implementation :: PyPy', ]
      )
