from setuptools import setup, find_packages

setup(
    name='gcpcheck',
    version='0.1',
    py_modules=['gcpcheck'],
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.8',
    install_requires=[
        'Click',
        'PyYAML',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points='''
        [console_scripts]
        gcpcheck=gcpcheck:cli
    ''',
)
