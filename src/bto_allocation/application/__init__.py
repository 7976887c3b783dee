"""Application layer: repositories, services and the allocation engine"""
