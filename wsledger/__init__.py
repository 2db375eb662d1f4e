# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

"""Normalization of Wealthsimple broker data into double-entry ledger records."""

__version__ = "0.1.0"
