from setuptools import setup, find_packages


# configure setup
setup(
    name='exospotpy',
    version='0.1',
    description='Toolkit for simulating the flux, radial velocity, and line bisector of spotted, rotating stars',
    long_description='',
    packages=find_packages(exclude=['tests', 'tests.*', 'examples', 'examples.*']),
    dependency_links=[],
    python_requires='>=3.8',
    install_requires=[
    'numpy >= 1.17',
    'scipy >= 1.4',
    'matplotlib >= 2.0',
    'astropy >= 4.0'],
    extras_require={
    'test': [
      'pytest >= 6.0', ],
    'docs': [
      'sphinx >= 1.5',
      'sphinx_rtd_theme >= 0.1.9', ]},
    keywords=['astronomy', 'astrophysics', 'stellar activity', 'starspots', 'radial velocity',
              'bisector', 'limb darkening', 'exoplanet', 'detection'],
    classifiers=[
        'Intended Audience :: Science/Research',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Topic :: Scientific/Engineering :: Astronomy',
        'Topic :: Scientific/Engineering :: Physics'
    ],
    include_package_data=True,
    zip_safe=False)
