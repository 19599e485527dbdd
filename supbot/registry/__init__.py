"""Plugin registry index types, index builder and registry client."""