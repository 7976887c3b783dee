"""Domain layer: entities, value objects and allocation policies"""
