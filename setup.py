from setuptools import setup, find_packages

setup(
    name="dns_inventory",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "sqlalchemy>=2.0",
        "pyyaml",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-mock",
            "pytest-cov",
        ],
    },
    entry_points={
        "console_scripts": [
            "dns-inventory=dns_inventory.cli.inventory:main",
            "dns-inventory-import=dns_inventory.cli.importer:main",
            "dns-inventory-net2grp=dns_inventory.cli.net2grp:main",
            "dns-inventory-manage=dns_inventory.cli.manage:main",
        ],
    },
    python_requires=">=3.8",
)
