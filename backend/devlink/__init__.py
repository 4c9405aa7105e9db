"""DevLink - developer portfolio builder"""
