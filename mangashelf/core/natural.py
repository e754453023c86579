from natsort import natsort_keygen, ns

# case-insensitive natural order: "page2" < "Page10"
natural_key = natsort_keygen(alg=ns.IGNORECASE)
