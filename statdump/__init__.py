"""statdump - field selection and query specification for system/process/cgroup stat dumps."""

__version__ = '1.0'
