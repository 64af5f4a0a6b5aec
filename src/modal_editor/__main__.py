import sys

from modal_editor.adapters.textual.app import main

sys.exit(main())
