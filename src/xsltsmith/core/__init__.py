"""Core building blocks shared by the XSLT invoker."""
