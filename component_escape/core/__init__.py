"""
Core escaping functionality: the component AST and the escape pipeline.
"""
