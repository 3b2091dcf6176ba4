from setuptools import find_packages, setup

setup(
    name="kerfbuffer",
    version="0.1.0",
    description="Rounded offset (buffer) of 2D points, lines, polylines and polygons",
    packages=find_packages(include=["kerfbuffer", "kerfbuffer.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "shapely>=2.0",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
