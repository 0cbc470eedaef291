"""Command Line Interface Package

The console script entry point is ``gitraven.cli.main:main``.
"""
