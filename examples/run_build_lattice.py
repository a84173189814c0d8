"""Build a lattice from a JSON input file.

Usage examples:
  python examples/run_build_lattice.py --write-template examples/configs/build_template.json
  python examples/run_build_lattice.py --input examples/configs/build_template.json
"""

from latticepy.workflows.build_lattice import main


if __name__ == "__main__":
    main()
