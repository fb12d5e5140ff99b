"""
Generators — produce repository, service, interface and trait sources.

``names`` resolves a requested class into a namespace and a file path,
``stubs`` holds the templates and renders them.  Writing is left to
``layerkit.core.persistence``.
"""
