"""Types and runtime for writing and running supbot plugins."""