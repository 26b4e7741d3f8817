"""stagecraft - stage, commit and push from a single terminal screen."""
