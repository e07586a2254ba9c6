"""IDL layer — models, packaged format schema, validators and loader.

An IDL document names a program and lists its instructions. Loading one
passes through two gates before any descriptor is built:
1. Schema — structural validation of the JSON/YAML shape
2. Semantic — name uniqueness and supported argument types
"""

IDL_FORMAT_VERSION = "0.1.0"
