from setuptools import setup, find_packages

setup(
    name="firemap",
    version="0.1.0",
    packages=find_packages(include=['firemap', 'firemap.*']),
    py_modules=['create_fire_map'],
    install_requires=[
        'pandas>=2.0.0',
        'geopandas>=0.14.0',
        'numpy>=1.23.0',
        'folium>=0.14.0',
        'branca>=0.6.0',
        'shapely>=2.0.0',
        'tqdm>=4.65.0',
        'matplotlib>=3.6.0',
        'seaborn>=0.12.0'
    ],
    extras_require={
        'test': [
            'pytest>=7.3.0'
        ]
    },
    python_requires='>=3.9',
)
