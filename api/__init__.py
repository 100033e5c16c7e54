"""HTTP API for the Skills Matrix"""
