"""Domain layer for HousePlanFiles.

Business rules for the storefront (currency, package cards, gallery grouping,
product cards). Framework-agnostic: testable without Flask.
"""
