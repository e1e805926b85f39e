from setuptools import setup, find_packages

setup(
    name="factorypress",
    version="1.0",
    description="Minimum button presses for toggle and counter machines",
    long_description=("Exact solver for factory machines whose buttons toggle indicator lights or increment "
                      "counters: breadth-first search over light patterns and exact-rational elimination with "
                      "a bounded search over free buttons for counter requirements"),
    long_description_content_type="text/plain",
    license="Apache License 2.0",
    python_requires=">=3.9",
    packages=find_packages(include=["factorypress", "factorypress.*"]),
    install_requires=["numpy", "scipy", "sympy", "pandas"],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["factorypress = factorypress.cli:main"]},
    classifiers=[
        "Intended Audience :: Science/Research", "Development Status :: 3 - Alpha", "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10", "Programming Language :: Python :: 3.11", "Programming Language :: Python :: 3.12",
        "Natural Language :: English", "Operating System :: OS Independent", "Topic :: Scientific/Engineering :: Mathematics"
    ],
    keywords=["linear algebra", "exact arithmetic", "integer programming", "puzzle"],
    zip_safe=False,
)
