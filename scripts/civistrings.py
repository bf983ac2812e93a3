import os
import sys

# Add the parent directory to the sys path so that modules can be found
base_path = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.append(base_path)

from scripts.strings_common import ExtractStrings

sys.exit(ExtractStrings())
