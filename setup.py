import os
import re

from setuptools import setup


def get_version():
    module_init = 'boltclient/version.py'

    if not os.path.isfile(module_init):
        module_init = '../' + module_init
        if not os.path.isfile(module_init):
            raise ValueError('Unable to determine version!')

    with open(module_init) as fp:
        return re.search(r'__version__\s*=\s*[\'"]([^\'"]*)[\'"]',
                         fp.read()).group(1)


setup(name='boltclient',
      version=get_version(),
      description='Async client for the Thunderbolt device manager (boltd)',
      license='LGPL',
      platforms='Linux',
      packages=['boltclient', 'boltclient.cli', 'boltclient.cli.commands'],
      entry_points={
          'console_scripts': [
              'boltclient = boltclient.cli.main:cli_entry'
          ]
      },
      python_requires='>=3.10',
      install_requires=['argcomplete', 'colorlog', 'dbus-fast', 'wrapt'],
      extras_require={
          'test': ['pytest']
      },
      keywords='thunderbolt bolt boltd dbus device authorization',
      include_package_data=True,
      zip_safe=False,
      classifiers=[
          'Development Status :: 3 - Alpha',
          'Environment :: Console',
          'Intended Audience :: Developers',
          'Intended Audience :: System Administrators',
          'License :: OSI Approved :: GNU Lesser General Public License v3 (LGPLv3)',
          'Operating System :: POSIX :: Linux',
          'Programming Language :: Python :: 3 :: Only',
          'Topic :: System :: Hardware'
      ])
