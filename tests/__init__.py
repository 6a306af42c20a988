"""
dice_sim test suite

- Unit tests for sampling, enumeration and aggregation
- Property-based tests using hypothesis
- Distribution comparison and pipeline tests
"""
