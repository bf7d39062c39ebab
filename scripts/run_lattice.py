# -*- coding: utf-8 -*-
import sys
from lvlattice.cli import main

# Cold start from configs/base.yaml unless the config says otherwise.
sys.exit(main(['--config', 'configs/base.yaml'] + sys.argv[1:]))
