"""
Build, test and deploy tooling for the CAPE contracts.

Wires a Solidity compiler resolver, network profiles and lifecycle hooks
into a small extension registry that the CLI dispatches through.
"""

__version__ = "0.1.0"
