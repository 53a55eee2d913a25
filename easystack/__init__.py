"""EasyStack -- interactive React + Vite project scaffolder.

Asks a short series of questions, drives ``npm`` and the Vite scaffolder to
create a React skeleton, then wires the selected CSS framework, Redux store
and React Router into the generated files.

Quick usage::

    easystack            # interactive run in the current directory
    easystack -o ~/code  # create the project under ~/code
    easystack --version
"""

__version__ = "1.0.0"
