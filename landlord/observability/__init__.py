"""Observability for the progression service (Prometheus metrics)"""
