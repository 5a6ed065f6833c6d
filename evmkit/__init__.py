"""Ethereum virtual machine primitives: forks, byte types, accounts, environment
validation, bytecode, database interfaces and precompiled contracts."""

__version__ = "0.1.0"