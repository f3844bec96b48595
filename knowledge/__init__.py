"""
growthchart knowledge base.

Contains reference data used by the bundled growth reference lookup:
- LMS tables for height, weight and BMI by age and gender
"""
