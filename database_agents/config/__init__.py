"""Configuration and shared state models for the database agent system"""
