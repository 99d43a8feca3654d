"""Verified ID verifier - presentation request sessions for Microsoft Entra Verified ID"""

__version__ = "0.1.0"
