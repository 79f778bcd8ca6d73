"""Domain packages: shifts, compliance, locations"""
