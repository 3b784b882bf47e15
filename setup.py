from setuptools import setup, find_packages
from pathlib import Path
# Read the long description from the README file
this_directory = Path(__file__).parent.resolve()
long_description = (this_directory / "README.md").read_text(encoding='utf-8')


setup(
    name='corrgen',
    version='0.1.0',
    description='Synthetic correlation data: points on affine subspaces with their exact linear equation systems.',
    keywords='synthetic data, correlation clustering, subspace clustering, linear algebra, benchmark',
    long_description=long_description,
    long_description_content_type='text/markdown',  # Specify the format of the long description
    packages=find_packages(where='src'),
    package_dir={'': 'src'},
    install_requires=[
        'numpy',
        'scipy',
        'matplotlib',
        'joblib',
        'psutil',
    ],
    extras_require={
        'test': ['pytest'],
    },
    classifiers=[
        'Development Status :: 3 - Alpha',  # Project maturity
        'Intended Audience :: Science/Research',
        'Topic :: Scientific/Engineering',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.9',
        'Operating System :: OS Independent',
    ],
    python_requires='>=3.9',  # Define minimum Python version
)
