#!/usr/bin/env python
from setuptools import setup
import os


def get_version():
    curdir = os.path.dirname(__file__)
    filename = os.path.join(curdir, 'src', 'qr2svg', 'version.py')
    with open(filename, 'rb') as fp:
        return fp.read().decode('utf8').split('=')[1].strip(" \n'")


def readme():
    with open('README.rst') as f:
        return f.read()


setup(
    name='qr2svg',
    version=get_version(),
    description='Render QR codes to SVG, PNG, JPEG and WebP',
    long_description=readme(),
    classifiers=[
        'Development Status :: 3 - Alpha',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Multimedia :: Graphics',
        'Topic :: Multimedia :: Graphics :: Graphics Conversion',
    ],
    keywords='qrcode svg png jpeg webp',
    license='MIT License',
    package_dir={'': 'src'},
    packages=[
        'qr2svg',
        'qr2svg.rasterizer',
    ],
    python_requires='>=3.10',
    install_requires=[
        'pillow>=10.0',
        'numpy',
        'resvg-py',
        'qrcode>=7.4',
    ],
    extras_require={
        'test': [
            'pytest'],
        'docs': [
            'sphinx',
            'sphinx-rtd-theme',
            'sphinx-autodoc-typehints',
            'myst-parser'],
    },
    include_package_data=True,
    entry_points={
        'console_scripts': ['qr2svg=qr2svg.__main__:main']
    },
    )
