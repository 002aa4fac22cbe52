# figcompose
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

import sys

from figcompose.cli import main

if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
