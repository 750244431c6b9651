"""Test package for gnugo-gtp.

This package contains all test modules organized by test type:
- unit/: Unit tests for the protocol layer, dispatcher, CLI and monitoring
- components/: Component tests against a real engine subprocess
  (the scripted engine in fake_engine.py)
"""
