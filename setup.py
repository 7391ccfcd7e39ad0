from setuptools import find_packages, setup

setup(
    name="cljeval",
    version="0.1.0",
    description="Evaluate Clojure and ClojureScript from an editor against an nREPL server",
    packages=find_packages(include=["cljeval", "cljeval.*"]),
    python_requires=">=3.9",
    install_requires=[],
)
