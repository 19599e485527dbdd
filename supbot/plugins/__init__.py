"""Ready-made plugins: counter, echo, random number, hello, eat-bcn, ruleta and wildcard logger."""