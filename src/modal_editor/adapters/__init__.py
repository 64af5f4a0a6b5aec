"""Terminal hosts that drive an EditorSession."""
