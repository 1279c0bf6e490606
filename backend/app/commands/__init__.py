"""
Operator commands (argparse entry points).
"""
