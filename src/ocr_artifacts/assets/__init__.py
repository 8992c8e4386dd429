"""
Bundled (read-only) artifact store.

Model and dictionary files placed in this package directory are shipped as
package data and served by BundledStore under their relative file names.
"""
