EXPLANATIONS = {
    "datasets": "Datasets lists the built-in example tables. Pass example:<name> as INPUT to use one.",
    "ingest": (
        "Ingest reads a dataset and reports basic dimensions. "
        "Accepts CSV, Parquet, Excel, or example:<name>."
    ),
    "describe": (
        "Describe summarizes one numeric field over the whole table: count, minimum, "
        "quartiles, median, mean, maximum and sample standard deviation (divisor n - 1)."
    ),
    "summarize": (
        "Summarize partitions records by --group in order of first appearance and reports the "
        "same statistics per group. Quartiles and the median use linear interpolation at rank "
        "(n - 1) * p over the sorted values. Groups with one record report NaN standard "
        "deviation unless --singleton-std error is given."
    ),
    "check-health": (
        "Health checks report missing fields, non-numeric values, empty tables and "
        "single-record groups as flags without stopping."
    ),
    "plot": (
        "Plot writes a histogram of --value, a box plot and a mean bar plot with standard "
        "deviation error bars when --group is set, and scatter and per-group line plots when "
        "--x is set. Use --format and --dpi to control the output files."
    ),
    "run-all": (
        "Run-all executes health checks, summaries, CSV tables and figures. "
        "Summaries are skipped when a health check reports an error."
    ),
}
