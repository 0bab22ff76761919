from .registry import ProcessRegistry, RegistryView, fetch_records, validate_port
