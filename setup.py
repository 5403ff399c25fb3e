#!/usr/bin/env python3
"""
lumina_ar Setup Script
"""

from setuptools import setup, find_packages

setup(
    name='lumina_ar',
    version='3.0.0',
    description='AR 앵커 자세 평활화 및 멀티터치 제스처 변환 시스템',
    author='Lumina AR Team',
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.8',
    install_requires=[
        'numpy>=1.20.0',
        'scipy>=1.7.0',
        'filterpy>=1.4.5',
        'pyyaml>=5.4.0',
        'pandas>=1.3.0',
    ],
    extras_require={
        'dev': [
            'pytest>=6.0.0',
            'pytest-cov>=2.0.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'lumina_ar=lumina_ar.main:main',
        ],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
    ],
)
