from setuptools import setup, find_packages
from beanpath import VERSION

with open('README.md') as fd:
    read_me = fd.read()

# noinspection SpellCheckingInspection
setup(
    name='beanpath',
    version=VERSION,
    description='Path expressions for reading and writing nested object graphs',
    long_description=read_me,
    long_description_content_type='text/markdown',
    license='Apache 2.0',
    packages=find_packages(exclude=['tests', 'tests.*']),
    include_package_data=True,
    install_requires=[
        'click', 'PyYAML', 'stringcase'
    ],
    extras_require={
        'test': ['pytest']
    },
    python_requires='>=3.7.0',
    entry_points='''
        [console_scripts]
        beanpath=beanpath.main:cli
    ''',
)
