"""tb — CLI kompilatora podręcznika."""
