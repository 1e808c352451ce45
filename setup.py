from setuptools import setup, find_namespace_packages  # type: ignore

setup(
    name="permcalc",
    version="0.1.0",
    description="permission resolution for guild snapshots",
    packages=find_namespace_packages(include=["permcalc*"]),
    package_data={"permcalc": ["py.typed"]},
    python_requires=">=3.10",
    install_requires=["hikari>=2.0.0.dev120", "coredis", "msgpack", "python-dotenv"],
    extras_require={"test": ["pytest"]},
)
