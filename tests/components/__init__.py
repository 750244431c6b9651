"""Component tests for gnugo-gtp.

These tests spawn tests/fake_engine.py as a subprocess and drive it through
the engine session facade (api/gnugo.py), covering the whole path from
command encoding to reply parsing over real pipes.
"""
