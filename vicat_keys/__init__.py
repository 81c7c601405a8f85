"""Vicat key server: redeem codes, license keys and the accounts that own them."""

__version__ = "1.0.0"
