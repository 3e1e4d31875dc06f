#!/usr/bin/env python3

import sys

from sepa_viewer.cli import main

sys.exit(main())
