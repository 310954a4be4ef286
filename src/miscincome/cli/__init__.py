"""
Command Line Interface Package

Console entry point for the MiscIncome sync tool.

Command Structure:
- miscincome: Main entry point with utility commands (version, config)
- miscincome source show: Parse a spreadsheet export and print its deposits
- miscincome ledger list: Print the deposits currently in the ledger
- miscincome compare: Classify spreadsheet deposits against the ledger
- miscincome sync: Compare, then add New deposits to the ledger
"""
