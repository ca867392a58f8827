"""
Data Transfer Objects (DTOs) Layer

This package contains the read models built by the aggregation services.
They decouple consumers from the entity classes and dump to plain data.

Structure:
- response/: Composite views returned by the aggregation services
"""
