from setuptools import setup, find_packages
setup(
    name='advanced-building',
    version='0.1.0',
    package_dir={'': 'src'},
    packages=find_packages(where='src'),
    include_package_data=True,
    package_data={
        'advanced_building': [
            'build/config/*.yaml',
        ],
    },
    description='Build orchestration targets for .NET libraries.',
    author='Your Name',
    author_email='youremail@example.com',
    install_requires=[
        'invoke>=2.0.0',
        'pyyaml>=6.0',
        'pydantic>=2.0.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'advanced-build = advanced_building.cli:main',
        ],
    },
)
