"""
Runnable examples for the differential drive motion model.

Provides examples demonstrating:
    - Decomposing odometry into rotate-translate-rotate motion
    - Propagating a particle cloud from worker threads
    - Loading motion model parameters from presets or JSON files
"""
