"""Playpen: the compile core of an in-browser component playground.

Playpen turns a set of in-memory virtual files (single-file components,
plain and typed scripts, stylesheets) into runnable client and SSR modules
without touching a filesystem or running a build step. Edit a file,
recompile it, see the result.

Core pieces:
- Compiler: classifies a virtual file and drives the component pipeline
  (script, SSR script, template, styles) through external compiler services
- Import canonicalization: rewrites relative import specifiers so compiled
  modules resolve inside a flat virtual module namespace
- Store: holds the virtual files and the latest errors per filename
"""
