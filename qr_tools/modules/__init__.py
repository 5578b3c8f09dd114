"""Program modules: the webcam scanner and the interactive generator."""
