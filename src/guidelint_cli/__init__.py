"""guidelint command line interface"""
