"""Command-line administration tools"""
