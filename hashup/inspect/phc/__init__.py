from hashup.inspect.phc._phc import PHC, Param, inspect_phc

__all__ = ["PHC", "Param", "inspect_phc"]
