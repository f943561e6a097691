"""
Entity catalog.

Responsibilities:
- Load the vendor, contact and group seed tables.
- Publish immutable vendor snapshots for the engine to read.
- Derive the communication hub's group / contact projections.
- Flag prospective vendors that collide with existing records.
"""
